"""Telegram bot implementation package.

Contains the Telegram-facing functionality: command and callback handlers,
the dispatcher that routes updates to them, response formatting and the
message templates.
"""
