import logging
from typing import Optional

from BackEnd.core.paths import log_dir

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logger(
	name: str,
	log_file: str = "app.log",
	level: int = logging.DEBUG,
	console: bool = True,
	handler_level: Optional[int] = None,
) -> logging.Logger:
	"""Configure and return a module-level logger."""
	logger = logging.getLogger(name)
	logger.setLevel(level)

	if not logger.handlers:
		formatter = logging.Formatter(FORMAT)
		file_handler = logging.FileHandler(log_dir() / log_file, encoding="utf-8")
		file_handler.setLevel(handler_level or level)
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)

		if console:
			console_handler = logging.StreamHandler()
			console_handler.setLevel(handler_level or level)
			console_handler.setFormatter(formatter)
			logger.addHandler(console_handler)

	return logger

def set_level(level_name: str):
	"""Apply a level name (e.g. 'INFO') to every logger created through setup_logger."""
	level = logging.getLevelName(level_name.upper())
	if not isinstance(level, int):
		level = logging.INFO
	for logger in logging.Logger.manager.loggerDict.values():
		if isinstance(logger, logging.Logger) and logger.handlers:
			logger.setLevel(level)
			for handler in logger.handlers:
				handler.setLevel(level)
