"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Engine state machine, reveal scheduler, session controller
    - parsing/: Text extraction and validation
    - agent/: Agent configuration and prompt handling
    - ui/: API client and markdown rendering

Uses fakes for the document service and mocks for the Agno agent.
"""
