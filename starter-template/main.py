"""
Ravenscroft Design Site
=======================

Flask app serving the site's JSON API through the Ravenscroft extension.

Run with:
    python main.py

Visit:
    http://localhost:5000/health            - Health check
    http://localhost:5000/api/content/artworks - Gallery
"""

import os
from flask import Flask, jsonify

# ===== App Setup =====

app = Flask(__name__)

# Load config
from config import Config, IS_PRODUCTION
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['DB_DIR'] = Config.DB_DIR
app.config['CONTENT_DB'] = Config.CONTENT_DB

# Mailchimp
app.config['MAILCHIMP_API_KEY'] = Config.MAILCHIMP_API_KEY
app.config['MAILCHIMP_SERVER_PREFIX'] = Config.MAILCHIMP_SERVER_PREFIX
app.config['MAILCHIMP_AUDIENCE_ID'] = Config.MAILCHIMP_AUDIENCE_ID

# Form relay + CORS
app.config['FORM_RELAY_URL'] = Config.FORM_RELAY_URL
app.config['SITE_NAME'] = Config.SITE_NAME
app.config['CORS_ORIGINS'] = Config.CORS_ORIGINS

# Session security
app.config['SESSION_COOKIE_SECURE'] = IS_PRODUCTION
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Ensure database directory exists
os.makedirs(Config.DB_DIR, exist_ok=True)

# ===== Ravenscroft Extension =====

from ravenscroft import Ravenscroft
ravenscroft = Ravenscroft(app)


# ===== Routes =====

@app.route('/')
def home():
    """API index"""
    return jsonify({
        'site': Config.SITE_NAME,
        'modules': ravenscroft.get_registered_modules(),
    })


# ===== Run =====

if __name__ == '__main__':
    app.logger.info("Starting on port 5000...")
    app.run(debug=not IS_PRODUCTION, port=5000, host='0.0.0.0')
