"""
Course Controller Module
Handles course catalog browsing and admin course management
"""
import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ..models.course import COURSE_TYPES, filter_courses
from ..schemas import CourseIn, first_error
from ..services.course_service import CourseService
from ..utils.auth import admin_required

logger = logging.getLogger(__name__)
course_bp = Blueprint('course', __name__)
course_service = CourseService()


def _course_listing():
    return [course.to_dict() for course in course_service.get_courses()]


@course_bp.route('/courses', methods=['GET'])
def list_courses():
    """
    List courses, newest first
    @query search: Case-insensitive match on title, provider or description
    @query type: all, FREE or PAID
    @returns: JSON with the filtered courses and the unfiltered total
    """
    search = request.args.get('search', '').strip()
    course_type = request.args.get('type', 'all')
    if course_type != 'all' and course_type not in COURSE_TYPES:
        return jsonify({'error': f'Invalid course type: {course_type}'}), 400

    courses = course_service.get_courses()
    filtered = filter_courses(courses, search, course_type)

    return jsonify({
        'data': [course.to_dict() for course in filtered],
        'count': len(filtered),
        'total': len(courses)
    }), 200


@course_bp.route('/courses/<int:course_id>', methods=['GET'])
def get_course(course_id):
    course = course_service.get_course(course_id)
    if course is None:
        return jsonify({'error': 'Course not found'}), 404
    return jsonify({'data': course.to_dict()}), 200


@course_bp.route('/courses', methods=['POST'])
@admin_required
def create_course():
    """
    Create a new course
    @returns: JSON with the refreshed course listing or error
    """
    try:
        course_in = CourseIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    if not course_service.add_course(course_in.to_record()):
        return jsonify({'error': 'Failed to add course'}), 502

    return jsonify({
        'message': 'Course added successfully!',
        'data': _course_listing()
    }), 201


@course_bp.route('/courses/<int:course_id>', methods=['PUT'])
@admin_required
def update_course(course_id):
    """
    Replace the editable fields of a course
    @returns: JSON with the refreshed course listing or error
    """
    try:
        course_in = CourseIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': first_error(e)}), 400

    if not course_service.update_course(course_id, course_in.to_update()):
        return jsonify({'error': 'Failed to update course'}), 502

    return jsonify({
        'message': 'Course updated successfully!',
        'data': _course_listing()
    }), 200


@course_bp.route('/courses/<int:course_id>', methods=['DELETE'])
@admin_required
def delete_course(course_id):
    """Delete a course; related progress, ratings and favorites are left in place."""
    if not course_service.delete_course(course_id):
        return jsonify({'error': 'Failed to delete course'}), 502

    return jsonify({
        'message': 'Course deleted successfully!',
        'data': _course_listing()
    }), 200
