"""
Dataset download
================

Fetch the compressed storm database once and reuse the local copy afterwards.
The file is read directly in its .bz2 form by the loader, so nothing is
extracted here.
"""

from __future__ import annotations
import logging
import os
import tempfile
import urllib.request

logger = logging.getLogger(__name__)

DATASET_URL = "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2"
DEFAULT_FILENAME = "StormData.csv.bz2"

def fetch_dataset(dest: str = DEFAULT_FILENAME, url: str = DATASET_URL, force: bool = False,
                  timeout: float = 120) -> str:
    """Download `url` to `dest` unless it is already there.

    The body is streamed to a temporary file next to `dest` and renamed when
    complete, so an interrupted download never leaves a truncated dataset.
    Network errors are raised to the caller.
    """
    if os.path.exists(dest) and not force:
        logger.info("Dataset already present at %s, skipping download", dest)
        return dest

    folder = os.path.dirname(os.path.abspath(dest))
    os.makedirs(folder, exist_ok=True)
    logger.info("Downloading %s -> %s", url, dest)

    req = urllib.request.Request(url, headers={"User-Agent": "Mozilla/5.0"})
    fd, tmp_path = tempfile.mkstemp(prefix=".stormharm_", dir=folder)
    try:
        with os.fdopen(fd, "wb") as out, urllib.request.urlopen(req, timeout=timeout) as response:
            while True:
                chunk = response.read(1 << 20)
                if not chunk:
                    break
                out.write(chunk)
        os.replace(tmp_path, dest)
    except BaseException:
        os.remove(tmp_path)
        raise
    logger.info("Saved %d bytes to %s", os.path.getsize(dest), dest)
    return dest
