"""Per-run scratch directory under the system temp root."""

import logging
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "ytgen-"


@contextmanager
def scratch_directory(root: Optional[str] = None) -> Iterator[Path]:
    """
    Create a uniquely named directory and remove it on every exit path.

    The random component keeps concurrent runs sharing one temp root apart.
    """
    path = Path(tempfile.mkdtemp(prefix=f"{SCRATCH_PREFIX}{uuid.uuid4().hex}-", dir=root))
    logger.debug("Created scratch directory %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug("Removed scratch directory %s", path)
