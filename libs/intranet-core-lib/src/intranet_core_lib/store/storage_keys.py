"""Names of the persisted collections."""

from enum import StrEnum


class StorageKey(StrEnum):
    """Logical collection names; the store prefixes them on disk."""

    COMPANIES = "companies"
    USERS = "users"
    SPACES = "spaces"
    SPACE_MEMBERS = "space_members"
    PAGES = "pages"
    PAGE_COMMENTS = "page_comments"
    PAGE_WIDGETS = "page_widgets"
    DOCUMENTS = "documents"
    ANNOUNCEMENTS = "announcements"
    ACTIVITY_LOGS = "activity_logs"
    NOTIFICATIONS = "notifications"
    NAV_QUICK_LINKS = "nav_quick_links"
    PAGE_VIEWS = "page_views"
    SESSION = "session"
    DEPARTMENTS = "departments"
    FAVORITES = "favorites"
    PAGE_TEMPLATES = "page_templates"
    READ_ACKNOWLEDGEMENTS = "read_acknowledgements"
    KNOWLEDGE_CATEGORIES = "knowledge_categories"
    KNOWLEDGE_ARTICLES = "knowledge_articles"
    EVENTS = "events"
    AI_QUERIES = "ai_queries"
    PAYMENT_ORDERS = "payment_orders"
    RAZORPAY_CONFIG = "razorpay_config"
    CUSTOM_DOMAINS = "custom_domains"
