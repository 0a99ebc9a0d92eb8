from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTextEdit

class FocusEndDialog(QDialog):
    """Asks what to do with a finished focus session: save it (with notes) or discard it."""

    SAVE = 1
    DISCARD = 2

    def __init__(self, subject_name, elapsed_text, notes="", parent=None):
        super().__init__(parent)
        self.setWindowTitle("Sessão de Foco")
        self.setModal(True)
        self.choice = None

        layout = QVBoxLayout()
        title = QLabel(f"{subject_name} · {elapsed_text}")
        title.setObjectName("Headline")
        layout.addWidget(title)
        layout.addWidget(QLabel("Anotações da sessão (opcional):"))
        self.notes_edit = QTextEdit()
        self.notes_edit.setPlainText(notes)
        layout.addWidget(self.notes_edit)

        buttons = QHBoxLayout()
        discard_btn = QPushButton("Descartar")
        save_btn = QPushButton("Salvar")
        save_btn.setObjectName("PrimaryBtn")
        save_btn.setDefault(True)
        buttons.addWidget(discard_btn)
        buttons.addWidget(save_btn)
        layout.addLayout(buttons)
        self.setLayout(layout)

        save_btn.clicked.connect(lambda: self._finish(self.SAVE))
        discard_btn.clicked.connect(lambda: self._finish(self.DISCARD))

    def _finish(self, choice):
        self.choice = choice
        self.accept()

    def notes(self):
        return self.notes_edit.toPlainText()
