"""
Achievement Controller Module
"""
from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ..schemas import AchievementIn, first_error
from ..services.achievement_service import AchievementService

achievement_bp = Blueprint('achievement', __name__)
achievement_service = AchievementService()


@achievement_bp.route('/users/<user_id>/achievements', methods=['GET'])
def get_achievements(user_id):
    achievements = achievement_service.get_user_achievements(user_id)
    return jsonify({
        'user_id': user_id,
        'data': [achievement.to_dict() for achievement in achievements]
    }), 200


@achievement_bp.route('/users/<user_id>/achievements', methods=['POST'])
def award_achievement(user_id):
    """
    Award a badge to a user
    @body: {"badge_type": "...", "badge_name": "...", "description": "..."}
    """
    try:
        body = AchievementIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    if not achievement_service.award_achievement(user_id, body.badge_type, body.badge_name, body.description):
        return jsonify({'error': 'Failed to award achievement'}), 502

    return jsonify({'message': 'Achievement awarded', 'user_id': user_id}), 201
