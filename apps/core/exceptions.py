"""
Custom exceptions and exception handler

Service-layer functions raise these directly; DRF turns them into
404/400/409 responses through custom_exception_handler.
"""
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException
from rest_framework import status


class ResourceNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'


class InvalidOperation(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid operation.'
    default_code = 'invalid_operation'


class ResourceConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource conflict.'
    default_code = 'resource_conflict'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that adds additional context
    """
    response = exception_handler(exc, context)

    if response is not None:
        data = response.data
        if isinstance(data, dict) and 'detail' in data:
            message = data['detail']
        elif isinstance(data, list) and data:
            message = data[0]
        else:
            message = str(exc)

        custom_response_data = {
            'error': True,
            'message': message,
            'status_code': response.status_code,
        }

        # Add field errors if present
        if isinstance(data, dict) and 'detail' not in data:
            custom_response_data['errors'] = data

        response.data = custom_response_data

    return response
