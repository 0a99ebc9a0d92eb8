from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QListWidget,
	QStackedWidget, QListWidgetItem, QComboBox, QProgressBar, QLineEdit, QTextEdit,
	QTreeWidget, QTreeWidgetItem, QMessageBox, QSizePolicy
)
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
import datetime
from PySide6.QtCore import Qt
from BackEnd.core.clock import local_midnight
from BackEnd.core.durations import format_clock, format_elapsed
from BackEnd.core.entities import NoteRecord
from BackEnd.core.errors import PersistenceError, ValidationError
from BackEnd.core.log import setup_logger
from BackEnd.services.aggregator import aggregate, load_dashboard
from BackEnd.services.countdown import CountdownPhase
from BackEnd.services.timer_service import TimerService
from FrontEnd.components.focus_end_dialog import FocusEndDialog
from FrontEnd.components.footer_today import FooterToday
from FrontEnd.styles.design_tokens import COLORS, stylesheet

logger = setup_logger(__name__)

PAGES = ["Dashboard", "Matérias", "Timer", "Notas"]
ALL_CATEGORIES = "Todas"


class MainWindow(QMainWindow):
	def __init__(self, settings, auth, sessions, subjects, notes):
		super().__init__()
		self.settings = settings
		self.auth = auth
		self.sessions = sessions
		self.subjects_repo = subjects
		self.notes_repo = notes
		self.subjects = []

		self.setWindowTitle("Estuda Concursos")
		self.resize(1000, 680)
		self.setStyleSheet(stylesheet())

		self.sidebar = QListWidget()
		self.sidebar.setObjectName("Sidebar")
		self.sidebar.setFixedWidth(200)
		self.sidebar.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		for name in PAGES:
			self.sidebar.addItem(QListWidgetItem(name))

		self.stack = QStackedWidget()
		self.dashboard_tab = self._build_dashboard_tab()
		self.subjects_tab = self._build_subjects_tab()
		self.timer_tab = self._build_timer_tab()
		self.notes_tab = self._build_notes_tab()
		for page in (self.dashboard_tab, self.subjects_tab, self.timer_tab, self.notes_tab):
			page.setObjectName("Page")
			self.stack.addWidget(page)

		main_layout = QHBoxLayout()
		main_layout.setContentsMargins(0, 0, 0, 0)
		main_layout.setSpacing(0)
		main_layout.addWidget(self.sidebar)
		main_layout.addWidget(self.stack)
		central = QWidget()
		central.setLayout(main_layout)
		self.setCentralWidget(central)

		self.sidebar.currentRowChanged.connect(self._on_page_changed)
		self.auth.changed.connect(lambda _change: self._update_greeting())
		self._reload_subjects()
		self.sidebar.setCurrentRow(0)

	def closeEvent(self, event):
		# Leaving the app mid-session does not record the partial session
		self.timer_service.shutdown()
		super().closeEvent(event)

	def _on_page_changed(self, row):
		if self.stack.currentWidget() is self.timer_tab and row != PAGES.index("Timer"):
			self._leave_timer()
		self.stack.setCurrentIndex(row)
		if row == PAGES.index("Dashboard"):
			self._refresh_dashboard()
		elif row == PAGES.index("Notas"):
			self._refresh_notes()
		elif row == PAGES.index("Timer"):
			self._update_today_label()

	def _show_error(self, message):
		QMessageBox.warning(self, "Estuda Concursos", message)

	def _reload_subjects(self):
		try:
			self.subjects = self.subjects_repo.list_subjects()
		except PersistenceError as e:
			self._show_error(f"Não foi possível carregar as matérias: {e}")
			return
		self._refresh_subject_tree()
		self._refresh_subject_combo()

	# --- Dashboard ---

	def _build_dashboard_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignTop)
		layout.setContentsMargins(32, 32, 32, 32)

		self.date_label = QLabel("")
		self.date_label.setObjectName("Muted")
		self.greeting_label = QLabel("")
		self.greeting_label.setObjectName("Headline")
		self.headline_label = QLabel("")
		self.headline_label.setObjectName("Muted")
		layout.addWidget(self.date_label)
		layout.addWidget(self.greeting_label)
		layout.addWidget(self.headline_label)

		self.figure = Figure(figsize=(4, 3))
		self.canvas = FigureCanvas(self.figure)
		self.canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		layout.addWidget(self.canvas)

		self.legend_label = QLabel("")
		self.legend_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		layout.addWidget(self.legend_label)

		recent_title = QLabel("SESSÕES RECENTES")
		recent_title.setObjectName("Muted")
		layout.addWidget(recent_title)
		self.recent_list = QListWidget()
		layout.addWidget(self.recent_list)

		w.setLayout(layout)
		return w

	def _update_greeting(self):
		user = self.auth.current_user()
		self.greeting_label.setText(f"Olá, {user.first_name}" if user else "Olá")

	def _refresh_dashboard(self):
		self.date_label.setText(datetime.date.today().strftime("%d/%m/%Y"))
		self._update_greeting()
		try:
			summary = load_dashboard(self.sessions, self.subjects_repo,
				recent_limit=self.settings.recent_sessions_limit)
		except PersistenceError as e:
			self._show_error(f"Não foi possível carregar o progresso: {e}")
			return
		day = summary.day
		self.headline_label.setText(f"Você estudou {day.hours_label} horas hoje.")
		self._draw_pie(day)

		parts = []
		for name, minutes in list(day.per_subject_minutes.items())[:3]:
			share = round(100 * minutes / day.total_minutes) if day.total_minutes else 0
			parts.append(f"{name} {share}%")
		self.legend_label.setText("   ·   ".join(parts))

		self.recent_list.clear()
		if not summary.recent_sessions:
			self.recent_list.addItem("Nenhuma sessão recente.")
		for record in summary.recent_sessions:
			title = record.subject_name if not record.topic_name else f"{record.subject_name} / {record.topic_name}"
			self.recent_list.addItem(f"{title}    {record.duration} • {record.status}")

	def _draw_pie(self, day):
		self.figure.clear()
		self.figure.patch.set_alpha(0.0)
		ax = self.figure.add_subplot(111)
		series = day.chart_series
		ax.pie(
			[s.weight for s in series],
			colors=[s.color for s in series],
			startangle=90,
			counterclock=False,
			wedgeprops={"width": 0.25, "edgecolor": COLORS['background'], "linewidth": 3},
		)
		center = "0" if series[0].placeholder else f"{len(series)}"
		ax.text(0, 0.08, center, ha="center", va="center", fontsize=20, fontweight="bold", color=COLORS['text'])
		ax.text(0, -0.15, "MATÉRIAS", ha="center", va="center", fontsize=8, color=COLORS['text_muted'])
		ax.set_aspect("equal")
		self.figure.tight_layout()
		self.canvas.draw()

	# --- Subjects ---

	def _build_subjects_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setContentsMargins(32, 32, 32, 32)

		form = QHBoxLayout()
		self.subject_name_edit = QLineEdit()
		self.subject_name_edit.setPlaceholderText("Nome da matéria")
		self.subject_time_edit = QLineEdit()
		self.subject_time_edit.setPlaceholderText("Tempo planejado (ex: 1h 30m)")
		add_subject_btn = QPushButton("Adicionar")
		add_subject_btn.setObjectName("PrimaryBtn")
		form.addWidget(self.subject_name_edit)
		form.addWidget(self.subject_time_edit)
		form.addWidget(add_subject_btn)
		layout.addLayout(form)

		self.subject_tree = QTreeWidget()
		self.subject_tree.setHeaderLabels(["Matéria / Tópico", "Planejado"])
		layout.addWidget(self.subject_tree)

		topic_row = QHBoxLayout()
		self.topic_name_edit = QLineEdit()
		self.topic_name_edit.setPlaceholderText("Novo tópico para a matéria selecionada")
		add_topic_btn = QPushButton("Adicionar tópico")
		delete_btn = QPushButton("Excluir selecionado")
		topic_row.addWidget(self.topic_name_edit)
		topic_row.addWidget(add_topic_btn)
		topic_row.addWidget(delete_btn)
		layout.addLayout(topic_row)

		w.setLayout(layout)
		add_subject_btn.clicked.connect(self._add_subject)
		add_topic_btn.clicked.connect(self._add_topic)
		delete_btn.clicked.connect(self._delete_selected)
		return w

	def _refresh_subject_tree(self):
		self.subject_tree.clear()
		for subject in self.subjects:
			item = QTreeWidgetItem([subject.name, subject.planned_time])
			item.setData(0, Qt.ItemDataRole.UserRole, ("subject", subject.id))
			for topic in subject.topics:
				child = QTreeWidgetItem([topic.name, ""])
				child.setData(0, Qt.ItemDataRole.UserRole, ("topic", topic.id))
				item.addChild(child)
			self.subject_tree.addTopLevelItem(item)
		self.subject_tree.expandAll()

	def _current_user_id(self):
		user = self.auth.current_user()
		return user.id if user else None

	def _add_subject(self):
		try:
			self.subjects_repo.add_subject(
				self.subject_name_edit.text(), self.subject_time_edit.text(), user_id=self._current_user_id())
		except (ValidationError, PersistenceError) as e:
			self._show_error(str(e))
			return
		self.subject_name_edit.clear()
		self.subject_time_edit.clear()
		self._reload_subjects()

	def _selected_tree_entry(self):
		item = self.subject_tree.currentItem()
		if item is None:
			return None, None
		return item, item.data(0, Qt.ItemDataRole.UserRole)

	def _add_topic(self):
		item, entry = self._selected_tree_entry()
		if entry is None:
			self._show_error("Selecione uma matéria primeiro.")
			return
		if entry[0] == "topic":
			entry = item.parent().data(0, Qt.ItemDataRole.UserRole)
		try:
			self.subjects_repo.add_topic(entry[1], self.topic_name_edit.text(), user_id=self._current_user_id())
		except (ValidationError, PersistenceError) as e:
			self._show_error(str(e))
			return
		self.topic_name_edit.clear()
		self._reload_subjects()

	def _delete_selected(self):
		_item, entry = self._selected_tree_entry()
		if entry is None:
			return
		kind, entry_id = entry
		try:
			if kind == "subject":
				self.subjects_repo.delete_subject(entry_id)
			else:
				self.subjects_repo.delete_topic(entry_id)
		except PersistenceError as e:
			self._show_error(str(e))
			return
		self._reload_subjects()

	# --- Timer ---

	def _build_timer_tab(self):
		w = QWidget()
		outer = QVBoxLayout()
		outer.setContentsMargins(32, 32, 32, 32)

		focus_label = QLabel("FOCADO EM")
		focus_label.setObjectName("Muted")
		focus_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		outer.addWidget(focus_label)
		pickers = QHBoxLayout()
		self.subject_combo = QComboBox()
		self.topic_combo = QComboBox()
		pickers.addStretch()
		pickers.addWidget(self.subject_combo)
		pickers.addWidget(self.topic_combo)
		pickers.addStretch()
		outer.addLayout(pickers)
		outer.addStretch()

		adjust_row = QHBoxLayout()
		self.minus_btn = QPushButton("−5 min")
		self.plus_btn = QPushButton("+5 min")
		self.timer_label = QLabel("25:00")
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		adjust_row.addWidget(self.minus_btn)
		adjust_row.addWidget(self.timer_label, 1)
		adjust_row.addWidget(self.plus_btn)
		outer.addLayout(adjust_row)

		self.progress = QProgressBar()
		self.progress.setRange(0, 1000)
		self.progress.setTextVisible(False)
		outer.addWidget(self.progress)
		outer.addStretch()

		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.start_pause_btn = QPushButton("Iniciar")
		self.start_pause_btn.setObjectName("PrimaryBtn")
		self.end_btn = QPushButton("Parar")
		for btn in (self.start_pause_btn, self.end_btn):
			btn.setMinimumHeight(56)
			btn_layout.addWidget(btn)
		outer.addLayout(btn_layout)

		self.footer_today = FooterToday("Hoje: 0m estudados")
		outer.addWidget(self.footer_today)
		w.setLayout(outer)

		# Timer logic
		self.timer_service = TimerService(self.sessions, self.auth,
			target_seconds=self.settings.default_target_seconds)
		self.timer_service.tick.connect(self._on_tick)
		self.timer_service.state_changed.connect(self._on_state)
		self.timer_service.completed.connect(self._on_completed)
		self.timer_service.saved.connect(self._on_saved)
		self.timer_service.save_failed.connect(self._on_save_failed)

		self.subject_combo.currentIndexChanged.connect(self._on_subject_picked)
		self.topic_combo.currentIndexChanged.connect(self._on_topic_picked)
		self.minus_btn.clicked.connect(lambda: self.timer_service.adjust_target(-1))
		self.plus_btn.clicked.connect(lambda: self.timer_service.adjust_target(1))
		self.start_pause_btn.clicked.connect(self._start_pause)
		self.end_btn.clicked.connect(self.timer_service.stop)

		self._on_tick(self.timer_service.engine.remaining_seconds)
		self._set_buttons(CountdownPhase.CONFIGURING.value)
		return w

	def _refresh_subject_combo(self):
		current = self.timer_service.subject
		self.subject_combo.blockSignals(True)
		self.subject_combo.clear()
		for subject in self.subjects:
			self.subject_combo.addItem(subject.name, subject.id)
		if not self.subjects:
			self.subject_combo.addItem("Sem matérias", None)
		index = self.subject_combo.findData(current.id) if current is not None else 0
		self.subject_combo.setCurrentIndex(max(0, index))
		self.subject_combo.blockSignals(False)
		self._on_subject_picked(self.subject_combo.currentIndex())

	def _on_subject_picked(self, _index):
		subject_id = self.subject_combo.currentData()
		subject = next((s for s in self.subjects if s.id == subject_id), None)
		self.topic_combo.blockSignals(True)
		self.topic_combo.clear()
		self.topic_combo.addItem("Sem tópico", None)
		for topic in (subject.topics if subject else []):
			self.topic_combo.addItem(topic.name, topic.id)
		self.topic_combo.blockSignals(False)
		self.timer_service.select_subject(subject)
		self._set_buttons(self.timer_service.phase.value)

	def _on_topic_picked(self, _index):
		subject = self.timer_service.subject
		topic_id = self.topic_combo.currentData()
		topic = None
		if subject is not None and topic_id is not None:
			topic = next((t for t in subject.topics if t.id == topic_id), None)
		self.timer_service.select_subject(subject, topic)

	def _on_tick(self, remaining):
		self.timer_label.setText(format_clock(remaining))
		self.progress.setValue(int(self.timer_service.engine.progress * 1000))

	def _on_state(self, state):
		self._set_buttons(state)

	def _set_buttons(self, state):
		has_subject = self.timer_service.subject is not None
		configuring = state == CountdownPhase.CONFIGURING.value
		self.minus_btn.setEnabled(configuring)
		self.plus_btn.setEnabled(configuring)
		self.subject_combo.setEnabled(configuring)
		self.topic_combo.setEnabled(configuring)
		if state == CountdownPhase.RUNNING.value:
			self.start_pause_btn.setEnabled(True)
			self.start_pause_btn.setText("Pausar")
			self.end_btn.setEnabled(True)
		elif state == CountdownPhase.PAUSED.value:
			self.start_pause_btn.setEnabled(True)
			self.start_pause_btn.setText("Retomar")
			self.end_btn.setEnabled(True)
		elif state == CountdownPhase.COMPLETED.value:
			self.start_pause_btn.setEnabled(False)
			self.end_btn.setEnabled(False)
		else:
			self.start_pause_btn.setEnabled(has_subject)
			self.start_pause_btn.setText("Iniciar")
			self.end_btn.setEnabled(False)

	def _start_pause(self):
		if self.timer_service.phase is CountdownPhase.CONFIGURING:
			if self.timer_service.subject is None:
				self._show_error("Escolha uma matéria antes de iniciar.")
				return
			self.timer_service.start()
		else:
			self.timer_service.pause_resume()

	def _on_completed(self, elapsed):
		self._ask_commit(self.timer_service.engine.notes)

	def _ask_commit(self, notes):
		subject = self.timer_service.subject
		while True:
			dialog = FocusEndDialog(subject.name if subject else "", format_elapsed(
				self.timer_service.engine.elapsed_seconds), notes, self)
			dialog.exec()
			if dialog.choice == FocusEndDialog.SAVE:
				if not self.timer_service.commit(dialog.notes()) and self.timer_service.subject is None:
					self._show_error("Escolha uma matéria para salvar a sessão.")
				return
			if dialog.choice == FocusEndDialog.DISCARD:
				self.timer_service.discard()
				return
			# closed with Esc or the window button: only an explicit yes drops the session
			notes = dialog.notes()
			answer = QMessageBox.question(
				self, "Estuda Concursos", "Descartar a sessão?",
				QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No, QMessageBox.StandardButton.No)
			if answer == QMessageBox.StandardButton.Yes:
				self.timer_service.discard()
				return

	def _on_saved(self, record):
		self._update_today_label()

	def _on_save_failed(self, message):
		answer = QMessageBox.warning(
			self, "Estuda Concursos",
			f"Não foi possível salvar a sessão: {message}\nTentar novamente?",
			QMessageBox.StandardButton.Retry | QMessageBox.StandardButton.Discard, QMessageBox.StandardButton.Retry)
		if answer == QMessageBox.StandardButton.Retry:
			self._ask_commit(self.timer_service.engine.notes)
		else:
			self.timer_service.discard()

	def _leave_timer(self):
		self.timer_service.shutdown()

	def _update_today_label(self):
		try:
			day = aggregate(self.sessions.list_sessions_since(local_midnight()))
		except PersistenceError as e:
			logger.error(f"Could not compute today's total: {e}")
			return
		self.footer_today.set_today(day.total_minutes)

	# --- Notes ---

	def _build_notes_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setContentsMargins(32, 32, 32, 32)

		filter_row = QHBoxLayout()
		filter_row.addStretch()
		filter_row.addWidget(QLabel("Categoria:"))
		self.category_filter = QComboBox()
		self.category_filter.setMinimumWidth(160)
		filter_row.addWidget(self.category_filter)
		layout.addLayout(filter_row)

		self.notes_list = QListWidget()
		layout.addWidget(self.notes_list)

		form = QHBoxLayout()
		self.note_title_edit = QLineEdit()
		self.note_title_edit.setPlaceholderText("Título")
		self.note_category_combo = QComboBox()
		self.note_category_combo.setEditable(True)
		form.addWidget(self.note_title_edit)
		form.addWidget(self.note_category_combo)
		layout.addLayout(form)
		self.note_body_edit = QTextEdit()
		self.note_body_edit.setPlaceholderText("Conteúdo da nota")
		self.note_body_edit.setMaximumHeight(120)
		layout.addWidget(self.note_body_edit)
		add_note_btn = QPushButton("Salvar nota")
		add_note_btn.setObjectName("PrimaryBtn")
		layout.addWidget(add_note_btn, alignment=Qt.AlignmentFlag.AlignRight)

		w.setLayout(layout)
		self.category_filter.currentIndexChanged.connect(lambda _i: self._refresh_notes(keep_filter=True))
		add_note_btn.clicked.connect(self._add_note)
		return w

	def _refresh_notes(self, keep_filter=False):
		selected = self.category_filter.currentText() if keep_filter else ALL_CATEGORIES
		category = None if selected in ("", ALL_CATEGORIES) else selected
		try:
			notes = self.notes_repo.list_notes(category)
			categories = sorted(set(self.notes_repo.categories()) | {s.name for s in self.subjects})
		except PersistenceError as e:
			self._show_error(f"Não foi possível carregar as notas: {e}")
			return

		self.category_filter.blockSignals(True)
		self.category_filter.clear()
		self.category_filter.addItems([ALL_CATEGORIES] + categories)
		self.category_filter.setCurrentText(selected or ALL_CATEGORIES)
		self.category_filter.blockSignals(False)
		self.note_category_combo.clear()
		self.note_category_combo.addItems(categories)

		self.notes_list.clear()
		for note in notes:
			tags = " ".join(note.tags)
			self.notes_list.addItem(f"{note.title}  [{note.category}]  {tags}\n{note.preview[:80]}")

	def _add_note(self):
		category = self.note_category_combo.currentText().strip() or "Geral"
		subject = next((s for s in self.subjects if s.name == category), None)
		record = NoteRecord(
			title=self.note_title_edit.text(),
			category=category,
			preview=self.note_body_edit.toPlainText().strip(),
			subject_id=subject.id if subject else None,
			user_id=self._current_user_id(),
		)
		try:
			self.notes_repo.insert_note(record)
		except (ValidationError, PersistenceError) as e:
			self._show_error(str(e))
			return
		self.note_title_edit.clear()
		self.note_body_edit.clear()
		self._refresh_notes(keep_filter=True)
