"""
Application state container for Entra Login.

- Defines the Application class.
- Holds runtime state: config, logger, credentials, selectors and the browser session.
- Provides a central object to pass to the orchestrator.
"""

class Application:
    def __init__(self, config: dict):
        self.config = config
        self.args = config.get("args")
        self.credentials = config.get("credentials")
        self.selectors = config.get("selectors")
        self.portal_url = config.get("portal_url")
        self.locale = config.get("locale")
        self.timeout = config.get("timeout")
        self.headless = config.get("headless", False)
        self.enable_screenshots = config.get("enable_screenshots", False)

        # Placeholder for runtime state
        self.logger = None
        self.session = None

    def set_logger(self, logger_obj):
        self.logger = logger_obj

    def set_session(self, session):
        self.session = session
