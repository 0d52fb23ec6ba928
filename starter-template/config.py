import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Document store
    DB_DIR = DB_DIR
    CONTENT_DB = os.path.join(DB_DIR, 'content.db')

    # Mailchimp (all three required for the newsletter endpoints)
    MAILCHIMP_API_KEY = os.getenv('MAILCHIMP_API_KEY', '')
    MAILCHIMP_SERVER_PREFIX = os.getenv('MAILCHIMP_SERVER_PREFIX', '')
    MAILCHIMP_AUDIENCE_ID = os.getenv('MAILCHIMP_AUDIENCE_ID', '')

    # FormSubmit relay
    FORM_RELAY_RECIPIENT = os.getenv('FORM_RELAY_RECIPIENT', 'melissa@ravenscroftdesign.com')
    FORM_RELAY_URL = f'https://formsubmit.co/{FORM_RELAY_RECIPIENT}'

    SITE_NAME = 'Ravenscroft Design'

    # Front ends allowed to call the API
    CORS_ORIGINS = [
        'https://ravenscroftdesign.com',
        'https://www.ravenscroftdesign.com',
        'http://localhost:5173',
    ]
