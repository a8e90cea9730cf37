"""
Custom AutoSchema for automatic tag assignment
"""
from drf_spectacular.openapi import AutoSchema


class CustomAutoSchema(AutoSchema):
    """
    Custom schema that assigns a tag per ViewSet to operations that do
    not declare their own tags through extend_schema
    """

    TAG_MAPPING = {
        'ServiceViewSet': 'Services',
        'BarberViewSet': 'Barbers',
        'ClientViewSet': 'Clients',
        'PackageViewSet': 'Packages',
        'SubscriptionViewSet': 'Subscriptions',
        'AppointmentViewSet': 'Appointments',
    }

    def get_tags(self):
        """Auto-assign tags based on ViewSet class"""
        view_name = self.view.__class__.__name__
        if view_name in self.TAG_MAPPING:
            return [self.TAG_MAPPING[view_name]]
        return super().get_tags()
