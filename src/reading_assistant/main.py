"""Main entry point for the reading assistant application."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from reading_assistant.coordinators import (
    AppController,
    AuthCoordinator,
    HistoryCoordinator,
    HomeCoordinator,
    PassageInteractionCoordinator,
    ProfileCoordinator,
    SessionCoordinator,
)
from reading_assistant.io import ApiClient, TipStore
from reading_assistant.services import (
    AccountService,
    AnnotationRenderer,
    PassageService,
    SettingsManager,
    ThreadPoolTaskRunner,
)
from reading_assistant.ui import AuthScreen, HistoryScreen, HomeScreen, MainWindow, ProfileScreen


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Reading Assistant")
    app.setOrganizationName("ReadingAssistant")

    # 2. Configuration and logging
    settings = SettingsManager()
    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("reading_assistant")
    logger.info("Using backend at %s", settings.get_api_base_url())

    # 3. Initialize Infrastructure
    api = ApiClient(settings.get_api_base_url(), timeout=settings.get_request_timeout())
    tip_store = TipStore(settings.get_data_dir())
    task_runner = ThreadPoolTaskRunner()

    # 4. Initialize Services
    passage_service = PassageService(api)
    account_service = AccountService(api)
    renderer = AnnotationRenderer()

    # 5. Construct UI
    main_window = MainWindow()
    auth_screen = AuthScreen()
    home_screen = HomeScreen()
    history_screen = HistoryScreen()
    profile_screen = ProfileScreen()
    main_window.add_screen("auth", auth_screen)
    main_window.add_screen("home", home_screen)
    main_window.add_screen("history", history_screen)
    main_window.add_screen("profile", profile_screen)

    # 6. Instantiate Coordinators (Dependency Injection)
    session = SessionCoordinator(account_service, task_runner)
    interaction = PassageInteractionCoordinator(passage_service, renderer, task_runner)
    auth = AuthCoordinator(auth_screen, session)
    home = HomeCoordinator(home_screen, interaction, passage_service, session, tip_store, task_runner)
    history = HistoryCoordinator(history_screen, passage_service, renderer, session, main_window, task_runner)
    profile = ProfileCoordinator(profile_screen, account_service, session, task_runner)
    controller = AppController(main_window, session, interaction, history, profile)

    # 7. Show UI, resume any existing session and start event loop
    main_window.show()
    controller.start()

    # Coordinators have no Qt parent; these locals keep them alive until exec() returns
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
