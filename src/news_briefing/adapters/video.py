"""IVideoEncoder adapter running the FFmpeg binary as a subprocess."""

import functools
import logging
import os
import shlex
import shutil
import subprocess
import threading
import time
from typing import List, Optional

import imageio_ffmpeg

from news_briefing.config import FFMPEG_BINARY, FPS
from news_briefing.errors import AssetMissingError, EncodeError, RunTimeoutError
from news_briefing.ports.interfaces import IVideoEncoder

logger = logging.getLogger(__name__)


FILTER_LISTING_TIMEOUT = 30


@functools.lru_cache(maxsize=None)
def has_filter(binary: str, name: str) -> bool:
    """True when ``binary -filters`` lists the named filter. Cached per binary."""
    try:
        listing = subprocess.run(
            [binary, "-hide_banner", "-filters"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=FILTER_LISTING_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Could not list filters of %s: %s", binary, exc)
        return False
    for line in listing.stdout.splitlines():
        parts = line.split()
        if len(parts) > 1 and parts[1] == name:
            return True
    return False


def _bundled_ffmpeg() -> Optional[str]:
    try:
        return imageio_ffmpeg.get_ffmpeg_exe()
    except RuntimeError:
        return None


def resolve_ffmpeg(binary: str = FFMPEG_BINARY, require_drawtext: bool = True) -> str:
    """
    Configured binary, else ``ffmpeg`` on PATH, else the one imageio-ffmpeg provides.
    With require_drawtext the first candidate whose build has the drawtext filter wins.
    """
    if binary:
        found = shutil.which(binary) or (binary if os.path.isfile(binary) else None)
        if not found:
            raise AssetMissingError(f"FFmpeg binary not found: {binary}")
        candidates = [found]
    else:
        candidates = [c for c in (shutil.which("ffmpeg"), _bundled_ffmpeg()) if c]
        if not candidates:
            raise AssetMissingError("FFmpeg binary was not resolved.")
    if not require_drawtext:
        return candidates[0]
    for candidate in candidates:
        if has_filter(candidate, "drawtext"):
            return candidate
        logger.warning("FFmpeg at %s has no drawtext filter", candidate)
    raise AssetMissingError("FFmpeg build lacks drawtext")


class FFmpegEncoder(IVideoEncoder):
    """H.264/AAC MP4 from a solid-colour lavfi source, a narration track and a filter graph."""

    def __init__(self, binary: Optional[str] = None, fps: int = FPS, preset: str = "medium"):
        self._binary = binary
        self.fps = fps
        self.preset = preset
        self._process: Optional[subprocess.Popen] = None
        self._lock = threading.Lock()
        self._cancelled = False

    @property
    def binary(self) -> str:
        """An explicit binary is used as given; otherwise it is resolved once."""
        if not self._binary:
            self._binary = resolve_ffmpeg()
        return self._binary

    def prepare(self) -> None:
        logger.info("Using ffmpeg at %s", self.binary)

    def build_command(
        self,
        audio_path: str,
        filter_complex: str,
        duration_seconds: float,
        output_path: str,
        size: tuple = (1280, 720),
        background: str = "0x020617",
    ) -> List[str]:
        width, height = size
        duration = f"{duration_seconds:g}"
        return [
            self.binary,
            "-y",
            "-f", "lavfi",
            "-i", f"color=c={background}:s={width}x{height}:d={duration}",
            "-i", audio_path,
            "-filter_complex", filter_complex,
            "-map", "[vout]",
            "-map", "1:a:0",
            "-c:v", "libx264",
            "-preset", self.preset,
            "-pix_fmt", "yuv420p",
            "-c:a", "aac",
            "-r", str(self.fps),
            "-t", duration,
            "-movflags", "+faststart",
            output_path,
        ]

    def encode(
        self,
        audio_path: str,
        filter_complex: str,
        duration_seconds: float,
        output_path: str,
        size: tuple = (1280, 720),
        background: str = "0x020617",
        timeout: Optional[float] = None,
    ) -> str:
        cmd = self.build_command(
            audio_path, filter_complex, duration_seconds, output_path, size, background
        )
        logger.debug(">> %s", " ".join(shlex.quote(c) for c in cmd))
        self._run(cmd, timeout)
        return output_path

    def _run(self, cmd: List[str], timeout: Optional[float]) -> None:
        t0 = time.time()
        with self._lock:
            self._cancelled = False
            try:
                self._process = subprocess.Popen(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    errors="replace",
                )
            except FileNotFoundError as exc:
                raise AssetMissingError(f"FFmpeg binary not found: {cmd[0]}") from exc
        process = self._process
        try:
            output, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            process.kill()
            process.communicate()
            raise RunTimeoutError(
                f"Video encoding did not finish within {timeout:.0f} seconds."
            ) from exc
        finally:
            with self._lock:
                self._process = None

        if self._cancelled:
            raise EncodeError("Video encoding was cancelled.")
        if process.returncode != 0:
            tail = "\n".join((output or "").strip().splitlines()[-15:])
            logger.error("FFmpeg exited with %s:\n%s", process.returncode, tail)
            raise EncodeError(f"Video encoding failed (ffmpeg exit code {process.returncode}).")
        logger.info("Encoded video in %.1fs", time.time() - t0)

    def cancel(self) -> None:
        with self._lock:
            if self._process is not None and self._process.poll() is None:
                logger.warning("Cancelling in-flight ffmpeg process %s", self._process.pid)
                self._cancelled = True
                self._process.kill()
