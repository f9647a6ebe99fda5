"""
Rating Controller Module
"""
import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ..schemas import RatingIn
from ..services.rating_service import RatingService

logger = logging.getLogger(__name__)
rating_bp = Blueprint('rating', __name__)
rating_service = RatingService()


@rating_bp.route('/courses/<int:course_id>/ratings', methods=['GET'])
def get_ratings(course_id):
    return jsonify(rating_service.get_rating_summary(course_id)), 200


@rating_bp.route('/courses/<int:course_id>/ratings', methods=['POST'])
def add_rating(course_id):
    """
    Add a star rating with an optional review
    @body: {"user_name": "...", "rating": 1-5, "review": "..."}
    @returns: JSON with the refreshed rating summary
    """
    try:
        body = RatingIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        fields = {str(error['loc'][0]) for error in e.errors() if error.get('loc')}
        if 'user_name' in fields:
            return jsonify({'error': 'Please enter your name'}), 400
        return jsonify({'error': 'Please select a rating between 1 and 5'}), 400

    if not rating_service.add_course_rating(course_id, body.user_name, body.rating, body.review):
        return jsonify({'error': 'Failed to submit review. Please try again.'}), 502

    summary = rating_service.get_rating_summary(course_id)
    summary['message'] = 'Thank you for your review!'
    return jsonify(summary), 201
