"""
WhatsApp gateway API client wrapper
"""
import requests
from django.conf import settings
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class WhatsAppClient:
    """
    Wrapper for the HTTP WhatsApp gateway
    """

    def __init__(self):
        self.api_url = settings.WHATSAPP_API_URL.rstrip('/')
        self.api_token = settings.WHATSAPP_API_TOKEN
        self.headers = {
            'Authorization': f'Bearer {self.api_token}',
            'Content-Type': 'application/json',
        }

    def send_message(self, chat_id: str, message: str) -> Dict[str, Any]:
        """
        Send a text message

        Args:
            chat_id: WhatsApp id, e.g. 5511987654321@c.us
            message: Message body

        Returns:
            {'success': bool, 'message_id': str | None, 'error': str | None}
        """
        try:
            response = requests.post(
                f"{self.api_url}/messages",
                headers=self.headers,
                json={'chatId': chat_id, 'message': message},
                timeout=15,
            )

            if response.status_code in (200, 201):
                data = response.json()
                return {'success': True, 'message_id': data.get('id'), 'error': None}

            logger.warning(f"WhatsApp gateway rejected message: {response.status_code}")
            return {
                'success': False,
                'message_id': None,
                'error': f"HTTP {response.status_code}: {response.text[:200]}",
            }

        except requests.RequestException as e:
            logger.error(f"Error sending WhatsApp message: {str(e)}")
            return {'success': False, 'message_id': None, 'error': str(e)}

    def get_status(self) -> Optional[Dict[str, Any]]:
        """
        Get gateway connection status

        Returns:
            Status data or None
        """
        try:
            response = requests.get(f"{self.api_url}/status", headers=self.headers, timeout=10)

            if response.status_code == 200:
                return response.json()

            logger.warning(f"Failed to get WhatsApp status: {response.status_code}")
            return None

        except requests.RequestException as e:
            logger.error(f"Error getting WhatsApp status: {str(e)}")
            return None


# Singleton instance
_whatsapp_client = None


def get_whatsapp_client() -> WhatsAppClient:
    """Get or create the WhatsApp client singleton"""
    global _whatsapp_client
    if _whatsapp_client is None:
        _whatsapp_client = WhatsAppClient()
    return _whatsapp_client
