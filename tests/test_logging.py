import logging

from accessory.logging import configure_logging, get_logger


def test_get_logger_uses_accessory_hierarchy():
	assert get_logger().name == "accessory"
	assert get_logger("fs_scan").name == "accessory.fs_scan"


def test_configure_logging_replaces_handler(capsys):
	configure_logging()
	logger = configure_logging(verbose=True)
	assert logger.level == logging.DEBUG
	assert len(logger.handlers) == 1
	get_logger("generator").debug("wrote %s", "x_accessor.go")
	assert capsys.readouterr().err == "accessory: wrote x_accessor.go\n"
	assert configure_logging().level == logging.INFO
