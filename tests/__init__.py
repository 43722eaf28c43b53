"""Test package for DocuWhiz.

Structure:
    - unit/: Chat engine, reveal, session, parsing, agent and client tests
    - integration/: API endpoints and the full upload-then-chat flow

PDFs are generated on the fly by fixtures in conftest.py.
Leverages pytest with pytest-check for soft assertions.
"""
