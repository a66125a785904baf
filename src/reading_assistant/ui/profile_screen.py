"""Profile screen - account details, known keywords and keyword history."""

from typing import List

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from reading_assistant.core import KeywordExplanationPair


class PasswordDialog(QDialog):
    """Modal form collecting the current/new/confirm password triple.

    Signals:
        submitted: (current_password, new_password, confirm_password)
    """

    submitted = Signal(str, str, str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Change Password")

        layout = QFormLayout(self)
        self.current_input = QLineEdit()
        self.current_input.setEchoMode(QLineEdit.Password)
        self.current_input.setPlaceholderText("Enter your current password")
        self.new_input = QLineEdit()
        self.new_input.setEchoMode(QLineEdit.Password)
        self.new_input.setPlaceholderText("Enter your new password")
        self.confirm_input = QLineEdit()
        self.confirm_input.setEchoMode(QLineEdit.Password)
        self.confirm_input.setPlaceholderText("Confirm your new password")

        layout.addRow("Current Password", self.current_input)
        layout.addRow("New Password", self.new_input)
        layout.addRow("Confirm New Password", self.confirm_input)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("QLabel { color: #c0392b; }")
        self.error_label.hide()
        layout.addRow(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._on_accepted)
        buttons.rejected.connect(self.reject)
        self.ok_button = buttons.button(QDialogButtonBox.Ok)
        layout.addRow(buttons)

    def _on_accepted(self):
        self.submitted.emit(self.current_input.text(), self.new_input.text(), self.confirm_input.text())

    def show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()

    def set_submitting(self, submitting: bool):
        self.ok_button.setEnabled(not submitting)

    def reset(self):
        for field in (self.current_input, self.new_input, self.confirm_input):
            field.clear()
        self.error_label.hide()


class ProfileScreen(QWidget):
    """Profile page.

    Signals:
        keyword_add_requested: Raw keyword typed by the user.
        keyword_remove_requested: Keyword chip removed.
        profile_submitted: (email, bio)
        password_change_requested: (current, new, confirm)
        clear_history_requested: Selected keywords to remove from history.
        clear_all_history_requested: Remove the whole keyword history.
        back_requested: Return to the main page.
    """

    keyword_add_requested = Signal(str)
    keyword_remove_requested = Signal(str)
    profile_submitted = Signal(str, str)
    password_change_requested = Signal(str, str, str)
    clear_history_requested = Signal(list)
    clear_all_history_requested = Signal()
    back_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        back_button = QPushButton("Back")
        back_button.clicked.connect(self.back_requested.emit)
        layout.addWidget(back_button, 0, Qt.AlignLeft)

        self.alert_label = QLabel()
        self.alert_label.setWordWrap(True)
        self.alert_label.hide()
        layout.addWidget(self.alert_label)

        layout.addWidget(QLabel("Profile Information"))
        form = QFormLayout()
        self.username_input = QLineEdit()
        self.username_input.setReadOnly(True)
        self.email_input = QLineEdit()
        self.email_input.setPlaceholderText("Enter your email")
        self.bio_input = QPlainTextEdit()
        self.bio_input.setPlaceholderText("Tell us about yourself...")
        self.bio_input.setMaximumHeight(90)
        form.addRow("Username", self.username_input)
        form.addRow("Email", self.email_input)
        form.addRow("Bio", self.bio_input)
        layout.addLayout(form)

        # Known keywords
        layout.addWidget(QLabel("Known Keywords"))
        hint = QLabel("Add keywords that you do not need further explanation for.")
        hint.setStyleSheet("QLabel { color: #888; font-size: 11px; }")
        layout.addWidget(hint)

        keyword_row = QHBoxLayout()
        self.keyword_input = QLineEdit()
        self.keyword_input.setPlaceholderText("Add a keyword...")
        self.keyword_input.returnPressed.connect(self._on_add_keyword)
        add_button = QPushButton("Add")
        add_button.clicked.connect(self._on_add_keyword)
        keyword_row.addWidget(self.keyword_input, 1)
        keyword_row.addWidget(add_button)
        layout.addLayout(keyword_row)

        self.keyword_list = QListWidget()
        self.keyword_list.setMaximumHeight(120)
        layout.addWidget(self.keyword_list)
        remove_button = QPushButton("Remove Selected Keyword")
        remove_button.clicked.connect(self._on_remove_keyword)
        layout.addWidget(remove_button, 0, Qt.AlignLeft)

        self.save_button = QPushButton("Save Profile")
        self.save_button.clicked.connect(self._on_save_profile)
        layout.addWidget(self.save_button, 0, Qt.AlignLeft)

        # Security
        layout.addWidget(QLabel("Security"))
        self.password_button = QPushButton("Change Password")
        self.password_button.clicked.connect(self._open_password_dialog)
        layout.addWidget(self.password_button, 0, Qt.AlignLeft)

        self.password_dialog = PasswordDialog(self)
        self.password_dialog.submitted.connect(self.password_change_requested.emit)

        # Keyword history
        layout.addWidget(QLabel("Keyword History"))
        self.history_list = QListWidget()
        layout.addWidget(self.history_list, 1)
        history_buttons = QHBoxLayout()
        clear_selected = QPushButton("Clear Selected")
        clear_selected.clicked.connect(self._on_clear_selected)
        clear_all = QPushButton("Clear All History")
        clear_all.clicked.connect(self.clear_all_history_requested.emit)
        history_buttons.addWidget(clear_selected)
        history_buttons.addWidget(clear_all)
        history_buttons.addStretch()
        layout.addLayout(history_buttons)

    def _on_add_keyword(self):
        if self.keyword_input.text().strip():
            self.keyword_add_requested.emit(self.keyword_input.text())

    def _on_remove_keyword(self):
        item = self.keyword_list.currentItem()
        if item is not None:
            self.keyword_remove_requested.emit(item.text())

    def _on_save_profile(self):
        self.profile_submitted.emit(self.email_input.text(), self.bio_input.toPlainText())

    def _on_clear_selected(self):
        selected = []
        for row in range(self.history_list.count()):
            item = self.history_list.item(row)
            if item.checkState() == Qt.Checked:
                selected.append(item.data(Qt.UserRole))
        self.clear_history_requested.emit(selected)

    def _open_password_dialog(self):
        self.password_dialog.reset()
        self.password_dialog.open()

    def display_profile(self, username: str, email: str, bio: str):
        self.username_input.setText(username)
        self.email_input.setText(email)
        self.bio_input.setPlainText(bio)

    def display_known_keywords(self, keywords: List[str]):
        self.keyword_list.clear()
        if not keywords:
            placeholder = QListWidgetItem("No keywords added yet")
            placeholder.setFlags(Qt.NoItemFlags)
            self.keyword_list.addItem(placeholder)
            return
        self.keyword_list.addItems(keywords)

    def display_keyword_history(self, pairs: List[KeywordExplanationPair]):
        self.history_list.clear()
        for pair in pairs:
            item = QListWidgetItem(f"{pair.keyword}: {pair.explanation}")
            item.setData(Qt.UserRole, pair.keyword)
            if pair.reason:
                item.setToolTip(pair.reason)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked)
            self.history_list.addItem(item)

    def clear_keyword_input(self):
        self.keyword_input.clear()

    def show_alert(self, kind: str, message: str):
        """Show a success or error banner ("success" / "error")."""
        color = "#2e7d32" if kind == "success" else "#c0392b"
        self.alert_label.setStyleSheet(f"QLabel {{ color: {color}; }}")
        self.alert_label.setText(message)
        self.alert_label.show()

    def clear_alert(self):
        self.alert_label.clear()
        self.alert_label.hide()

    def set_submitting(self, submitting: bool):
        self.save_button.setEnabled(not submitting)
        self.password_dialog.set_submitting(submitting)

    def set_password_change_enabled(self, enabled: bool):
        self.password_button.setEnabled(enabled)

    def show_password_error(self, message: str):
        self.password_dialog.show_error(message)

    def close_password_dialog(self):
        self.password_dialog.reset()
        self.password_dialog.accept()
