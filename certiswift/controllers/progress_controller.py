"""
Progress Controller Module
Progress tracker actions for a user on a course
"""
import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..schemas import ProgressIncrementIn, ProgressModuleIn, ProgressSetIn, first_error
from ..services.progress_service import ProgressService

logger = logging.getLogger(__name__)
progress_bp = Blueprint('progress', __name__)
progress_service = ProgressService()


def _total_modules(value=None) -> int:
    return value or current_app.config['DEFAULT_TOTAL_MODULES']


def _tracker_response(user_id, course_id, tracker, status=200):
    if tracker is None:
        return jsonify({'error': 'Failed to update progress'}), 502
    return jsonify({
        'user_id': user_id,
        'course_id': course_id,
        'data': tracker.to_dict()
    }), status


@progress_bp.route('/courses/<int:course_id>/progress', methods=['GET'])
def get_course_progress(course_id):
    """
    Tracker state of one user on one course
    @query user_id: Display name of the learner
    @query total_modules: Optional module count
    """
    user_id = request.args.get('user_id', '').strip()
    if not user_id:
        return jsonify({'error': 'Please enter your name to start tracking'}), 400

    total_modules = request.args.get('total_modules', type=int)
    if total_modules is not None and total_modules < 1:
        return jsonify({'error': 'total_modules must be at least 1'}), 400

    tracker = progress_service.get_tracker(user_id, course_id, _total_modules(total_modules))
    return _tracker_response(user_id, course_id, tracker)


@progress_bp.route('/courses/<int:course_id>/progress', methods=['PUT'])
def set_course_progress(course_id):
    try:
        body = ProgressSetIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    tracker = progress_service.set_progress(
        body.user_id, course_id, body.progress_percentage, _total_modules()
    )
    return _tracker_response(body.user_id, course_id, tracker)


@progress_bp.route('/courses/<int:course_id>/progress/module', methods=['POST'])
def complete_module(course_id):
    try:
        body = ProgressModuleIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    tracker = progress_service.complete_module(
        body.user_id, course_id, _total_modules(body.total_modules)
    )
    return _tracker_response(body.user_id, course_id, tracker)


@progress_bp.route('/courses/<int:course_id>/progress/increment', methods=['POST'])
def add_progress(course_id):
    try:
        body = ProgressIncrementIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    tracker = progress_service.add_progress(
        body.user_id, course_id, body.increment, _total_modules()
    )
    return _tracker_response(body.user_id, course_id, tracker)


@progress_bp.route('/users/<user_id>/progress', methods=['GET'])
def get_user_progress(user_id):
    progress = progress_service.get_user_progress(user_id)
    return jsonify({
        'user_id': user_id,
        'data': [item.to_dict() for item in progress]
    }), 200
