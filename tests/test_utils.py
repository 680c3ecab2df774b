import logging

import MarchingCubes
from MarchingCubes.utils import configure_logging


def test_configure_logging(tmp_path):
    logfile = tmp_path / "marching_cubes.log"
    configure_logging(level=logging.DEBUG, logfile=logfile)
    logger = logging.getLogger(MarchingCubes.__name__)
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        logger.debug("grid marched")
        for handler in logger.handlers:
            handler.flush()
        assert "grid marched" in logfile.read_text()
    finally:
        configure_logging()
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


if __name__ == "__main__":
    import pathlib
    import tempfile

    test_configure_logging(pathlib.Path(tempfile.mkdtemp()))
