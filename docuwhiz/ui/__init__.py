"""NiceGUI interface - thin presentation layer over the chat session.

Responsibilities:
    - PDF upload widget
    - Chat message display with the word-by-word reveal
    - HTTP client for the document API

All conversation logic lives in docuwhiz.chat. This package only renders it.
"""
