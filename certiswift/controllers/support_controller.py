"""
Support Controller Module
Relays validated support requests to the configured webhook
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from ..services.notification_sink import NotificationError
from ..services.support_service import RateLimitedError, SupportValidationError

logger = logging.getLogger(__name__)
support_bp = Blueprint('support', __name__)


@support_bp.route('/support', methods=['POST'])
def submit_support_request():
    """
    Submit a support request
    @body: {"name", "email", "type", "subject", "message"}
    @returns: 200 when sent, 400 invalid, 429 rate limited, 502 delivery failed
    """
    support_service = current_app.extensions['support_service']
    client_key = request.remote_addr or 'anonymous'

    try:
        result = support_service.submit(request.get_json(silent=True), client_key)
    except SupportValidationError as e:
        return jsonify({'error': str(e)}), 400
    except RateLimitedError as e:
        return jsonify({'error': str(e)}), 429
    except NotificationError as e:
        logger.error(f"Error sending support request: {str(e)}")
        return jsonify({'error': 'Failed to send support request. Please try again.'}), 502

    return jsonify({
        'message': "Support request sent successfully! We'll get back to you soon.",
        'data': result
    }), 200
