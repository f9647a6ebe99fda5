"""
Dashboard Controller Module
"""
import logging

from flask import Blueprint, jsonify

from ..services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)
dashboard_bp = Blueprint('dashboard', __name__)
dashboard_service = DashboardService()


@dashboard_bp.route('/users/<user_id>/dashboard', methods=['GET'])
def get_dashboard(user_id):
    """
    Learning dashboard of a user
    @returns: JSON with stats, current progress, achievements and favorite courses
    """
    try:
        return jsonify({'data': dashboard_service.get_dashboard(user_id)}), 200
    except Exception as e:
        logger.error(f"Failed to load dashboard data: {str(e)}", exc_info=True)
        return jsonify({
            'error': 'Failed to load dashboard data',
            'details': str(e)
        }), 500
