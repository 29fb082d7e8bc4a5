import os
import sys
import glob
import logging
import tempfile
from logging.handlers import RotatingFileHandler


logger = logging.getLogger(__name__)


class LazyRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler writing into a private temp directory.

    A directory matching tmpdir_prefix is reused when it is owned by us, has
    0o700 permissions and holds no symlinks; otherwise a new one is made. The
    log file itself isn't opened until the first record is emitted.
    """

    def __init__(self, tmpdir_prefix='', basename=None, *args, **kwargs):

        self.base_dir = self._create_temp_dir(tmpdir_prefix)
        kwargs['filename'] = os.path.join(self.base_dir, basename)
        kwargs['delay'] = True
        super().__init__(*args, **kwargs)

    @staticmethod
    def _tmpdir_usable(path):

        st = os.stat(path)
        if st.st_uid != os.getuid() or (st.st_mode & 0o777) != 0o700:
            return False
        for item in os.listdir(path):
            if os.path.islink(os.path.join(path, item)):
                return False
        return True

    @classmethod
    def _create_temp_dir(cls, tmpdir_prefix):

        existing_dirs = []
        if tmpdir_prefix:
            pattern = os.path.join(tempfile.gettempdir(), f"{tmpdir_prefix}*")
            existing_dirs.extend(d for d in sorted(glob.glob(pattern)) if os.path.isdir(d))

        for dir_ in existing_dirs:
            if cls._tmpdir_usable(dir_):
                logger.debug(f"Using existing log directory: {dir_}")
                return dir_

        # mkdtemp already creates it 0o700
        base_dir = tempfile.mkdtemp(prefix=tmpdir_prefix)
        logger.debug(f"Created new log directory: {base_dir}")
        return base_dir


def setup_logger(prefix, name=None, level=logging.WARNING):
    """
    Configures logger `name` to write everything to a per-process rotating log
    file and records at `level` and above to stderr. Handlers from an earlier
    call are replaced.
    """
    pid = os.getpid()
    log_file = f"log_{pid}.log"
    logger_ = logging.getLogger(name)
    logger_.setLevel(logging.DEBUG)

    for handler in list(logger_.handlers):
        logger_.removeHandler(handler)
        handler.close()

    handler = LazyRotatingFileHandler(tmpdir_prefix=prefix + '.', basename=log_file,
                                      maxBytes=10*(1024 ** 2), backupCount=3)
    handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s: %(message)s'))
    logger_.addHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    logger_.addHandler(stderr_handler)
    return logger_
