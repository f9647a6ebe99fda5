"""
Admin Controller Module
Login/logout for the admin area and admin account creation
"""
import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from ..schemas import AdminCredentials
from ..services.admin_service import AdminService
from ..utils.auth import admin_required, current_admin, login_admin, logout_admin

logger = logging.getLogger(__name__)
admin_bp = Blueprint('admin', __name__)
admin_service = AdminService()


def _credentials():
    try:
        return AdminCredentials.model_validate(request.get_json(silent=True) or {}), None
    except ValidationError:
        return None, (jsonify({'error': 'Please fill in all fields'}), 400)


@admin_bp.route('/login', methods=['POST'])
def login():
    """
    Authenticate an admin and open an admin session
    @body: {"email": "...", "password": "..."}
    """
    credentials, error = _credentials()
    if error:
        return error

    if not admin_service.authenticate_admin(credentials.email, credentials.password):
        return jsonify({
            'error': 'Invalid credentials! Please check your email and password.'
        }), 401

    login_admin(credentials.email)
    logger.info(f"Admin {credentials.email} logged in")
    return jsonify({
        'message': 'Welcome to admin panel!',
        'authenticated': True,
        'email': credentials.email
    }), 200


@admin_bp.route('/logout', methods=['POST'])
def logout():
    logout_admin()
    return jsonify({'authenticated': False}), 200


@admin_bp.route('/session', methods=['GET'])
def session_state():
    email = current_admin()
    return jsonify({'authenticated': email is not None, 'email': email}), 200


@admin_bp.route('/admins', methods=['POST'])
@admin_required
def create_admin():
    """
    Create another admin account
    @body: {"email": "...", "password": "..."}
    """
    credentials, error = _credentials()
    if error:
        return error

    if not admin_service.create_admin(credentials.email, credentials.password):
        return jsonify({'error': 'Failed to create admin account'}), 502

    return jsonify({'message': 'Admin account created successfully!'}), 201
