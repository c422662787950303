"""Launchpad Bot Application Package.

A Telegram bot front-end for the Susumi Pioneer Validator NFT launchpad. It
answers a fixed set of commands and inline-button callbacks with templated
text and a deep-link button into the launchpad web application.

The application follows a modular architecture with separate concerns for:
- Middleware pipeline (error recovery, input sanitization, rate limiting)
- Command and callback dispatch
- Message templates and tier information
- Webhook and health endpoints for production deployment
"""
