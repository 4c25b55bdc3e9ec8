from .section import Section
from .content_item import ContentItem, CONTENT_TYPES
from .user import AdminUser
from .audit_log import AuditLog

__all__ = ["Section", "ContentItem", "CONTENT_TYPES", "AdminUser", "AuditLog"]
