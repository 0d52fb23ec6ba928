import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Ravenscroft site backend.
    Hosts can override any key through environment variables or app.config.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Document store backing file (artworks, events, siteContent, users, ...)
    CONTENT_DB = os.getenv('CONTENT_DB', os.path.join(DB_DIR, "content.db"))

    # Mailchimp settings
    MAILCHIMP_API_KEY = os.getenv('MAILCHIMP_API_KEY')
    MAILCHIMP_SERVER_PREFIX = os.getenv('MAILCHIMP_SERVER_PREFIX')
    MAILCHIMP_AUDIENCE_ID = os.getenv('MAILCHIMP_AUDIENCE_ID')
    MAILCHIMP_TIMEOUT = int(os.getenv('MAILCHIMP_TIMEOUT', '15'))

    # FormSubmit relay (fallback transport for newsletter + contact form)
    FORM_RELAY_RECIPIENT = os.getenv('FORM_RELAY_RECIPIENT', 'melissa@ravenscroftdesign.com')
    FORM_RELAY_URL = os.getenv('FORM_RELAY_URL', f"https://formsubmit.co/{FORM_RELAY_RECIPIENT}")

    SITE_NAME = os.getenv('SITE_NAME', 'Ravenscroft Design')

    # Comma separated list of origins allowed to call the JSON endpoints
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    # Collection names
    USERS_COLLECTION = "users"
    ARTWORKS_COLLECTION = "artworks"
    EVENTS_COLLECTION = "events"
    SITE_CONTENT_COLLECTION = "siteContent"
    CONTACT_COLLECTION = "contactSubmissions"
    LOGS_COLLECTION = "appLogs"

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


def config_defaults():
    """Upper-case Config attributes as a plain dict (for app.config.setdefault)"""
    return {
        key: getattr(Config, key)
        for key in dir(Config)
        if key.isupper()
    }
