"""
Admin Service Module
Verifies admin credentials and creates admin accounts
"""
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from .base import SupabaseService
from ..models.admin import Admin
from ..utils.supabase_utils import first_row, log_supabase_error

logger = logging.getLogger(__name__)


class AdminService(SupabaseService):
    """
    Server-side credential verification against the admins table.

    Passwords are stored as werkzeug hashes. These methods are deliberately
    not wrapped with the call logger, which would print the password.
    """
    table_name = 'admins'

    def authenticate_admin(self, email: str, password: str) -> bool:
        """
        Check an email/password pair
        @returns: True only when a row with this email exists and the hash matches
        """
        try:
            response = self.table()\
                .select('*')\
                .eq('email', email)\
                .limit(1)\
                .execute()
        except Exception as e:
            log_supabase_error("Auth", e)
            return False

        row = first_row(response.data)
        if not row:
            logger.warning(f"Admin login attempt for unknown email {email}")
            return False

        admin = Admin.from_record(row)
        try:
            valid = check_password_hash(admin.password, password)
        except ValueError:
            # Stored value is not a recognised hash, e.g. a legacy plaintext row
            logger.warning(f"Admin {email} has no usable password hash")
            return False

        if not valid:
            logger.warning(f"Invalid password for admin {email}")
        return valid

    def create_admin(self, email: str, password: str) -> bool:
        """
        Insert an admin account with a hashed password
        @returns: True if the store accepted the insert
        """
        try:
            self.table().insert([{
                'email': email,
                'password': generate_password_hash(password),
            }]).execute()
            logger.info(f"Admin account created for {email}")
            return True
        except Exception as e:
            log_supabase_error("Create admin", e)
            return False
