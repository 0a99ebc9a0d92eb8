import sys
from PySide6.QtWidgets import QApplication
from BackEnd.core.config import load_settings
from BackEnd.core.log import setup_logger, set_level
from BackEnd.repos.note_repo import NoteRepo
from BackEnd.repos.session_repo import SessionRepo
from BackEnd.repos.subject_repo import SubjectRepo
from BackEnd.repos.user_repo import UserRepo
from BackEnd.services.auth_state import AuthSession
from FrontEnd.ui_main import MainWindow

logger = setup_logger("estuda")

def main():
    settings = load_settings()
    set_level(settings.log_level)
    logger.info(f"Using database {settings.db_file}")

    app = QApplication(sys.argv)

    auth = AuthSession()
    auth.sign_in(UserRepo(settings.db_file).get_or_create_user(settings.user_email, settings.user_name))

    win = MainWindow(
        settings,
        auth,
        sessions=SessionRepo(settings.db_file),
        subjects=SubjectRepo(settings.db_file),
        notes=NoteRepo(settings.db_file),
    )
    app.aboutToQuit.connect(auth.sign_out)
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
