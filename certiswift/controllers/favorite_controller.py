"""
Favorite Controller Module
"""
from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ..schemas import FavoriteIn, first_error
from ..services.favorite_service import FavoriteService

favorite_bp = Blueprint('favorite', __name__)
favorite_service = FavoriteService()


@favorite_bp.route('/courses/<int:course_id>/favorite', methods=['POST'])
def toggle_favorite(course_id):
    """
    Add the course to the user's favorites, or remove it if already there
    @returns: JSON with the new membership and the user's favorites
    """
    try:
        body = FavoriteIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    if not favorite_service.toggle_favorite(body.user_id, course_id):
        return jsonify({'error': 'Failed to update favorites'}), 502

    favorites = favorite_service.get_user_favorites(body.user_id)
    return jsonify({
        'course_id': course_id,
        'is_favorite': favorite_service.is_favorite(body.user_id, course_id, favorites),
        'favorites': favorites
    }), 200


@favorite_bp.route('/users/<user_id>/favorites', methods=['GET'])
def get_favorites(user_id):
    return jsonify({
        'user_id': user_id,
        'data': [favorite.to_dict() for favorite in favorite_service.list_favorites(user_id)]
    }), 200
