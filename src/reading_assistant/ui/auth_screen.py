"""Auth screen - sign in / create account form."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class AuthScreen(QWidget):
    """Login and signup form in one widget.

    Signals:
        login_requested: (username, password)
        signup_requested: (username, email, password, bio)
        mode_toggle_requested: User clicked the "Create account"/"Sign in" link.
    """

    login_requested = Signal(str, str)
    signup_requested = Signal(str, str, str, str)
    mode_toggle_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_login = True
        self._setup_ui()
        self.set_mode(True)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setAlignment(Qt.AlignTop)

        self.title_label = QLabel()
        self.title_label.setStyleSheet("QLabel { font-size: 22px; font-weight: bold; }")
        layout.addWidget(self.title_label)

        self.toggle_button = QPushButton()
        self.toggle_button.setFlat(True)
        self.toggle_button.clicked.connect(self.mode_toggle_requested.emit)
        layout.addWidget(self.toggle_button, 0, Qt.AlignLeft)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("QLabel { color: #c0392b; }")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        form = QFormLayout()
        self.username_input = QLineEdit()
        self.username_input.setPlaceholderText("Your username")
        self.email_input = QLineEdit()
        self.email_input.setPlaceholderText("you@example.com")
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.setPlaceholderText("Your password")
        self.password_input.returnPressed.connect(self._on_submit)
        self.bio_input = QPlainTextEdit()
        self.bio_input.setPlaceholderText("Tell us about yourself (optional)")
        self.bio_input.setMaximumHeight(80)

        form.addRow("Username", self.username_input)
        self.email_label = QLabel("Email")
        form.addRow(self.email_label, self.email_input)
        form.addRow("Password", self.password_input)
        self.bio_label = QLabel("Bio")
        form.addRow(self.bio_label, self.bio_input)
        layout.addLayout(form)

        self.submit_button = QPushButton()
        self.submit_button.clicked.connect(self._on_submit)
        layout.addWidget(self.submit_button)

    def _on_submit(self):
        if self._is_login:
            self.login_requested.emit(self.username_input.text(), self.password_input.text())
        else:
            self.signup_requested.emit(
                self.username_input.text(),
                self.email_input.text(),
                self.password_input.text(),
                self.bio_input.toPlainText(),
            )

    def set_mode(self, is_login: bool):
        self._is_login = is_login
        self.title_label.setText("Welcome back!" if is_login else "Create account")
        self.toggle_button.setText(
            "Don't have an account yet? Create account" if is_login else "Already have an account? Sign in"
        )
        self.submit_button.setText("Sign in" if is_login else "Create account")
        for widget in (self.email_label, self.email_input, self.bio_label, self.bio_input):
            widget.setVisible(not is_login)

    def set_loading(self, loading: bool):
        self.submit_button.setEnabled(not loading)

    def show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()

    def clear_error(self):
        self.error_label.clear()
        self.error_label.hide()

    def clear_form(self):
        for field in (self.username_input, self.email_input, self.password_input):
            field.clear()
        self.bio_input.clear()
