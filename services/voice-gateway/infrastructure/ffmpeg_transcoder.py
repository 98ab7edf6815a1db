"""ffmpeg implementation of the AudioTranscoder interface."""

import subprocess
import threading
from collections.abc import Iterator
from pathlib import Path

from gateway_common.logging import setup_logging

from config import TranscoderConfig
from exceptions import TranscodeError

from .interfaces import AudioTranscoder, PCMStream

logger = setup_logging()

STDERR_TAIL_BYTES = 2000


def build_ffmpeg_command(ffmpeg_path: str, input_path: Path) -> list[str]:
    """Command line that decodes any input to raw mono 16 kHz s16le on stdout."""
    return [
        ffmpeg_path,
        "-nostdin",
        "-hide_banner",
        "-loglevel",
        "error",
        "-i",
        str(input_path),
        "-vn",
        "-acodec",
        "pcm_s16le",
        "-ac",
        "1",
        "-ar",
        "16000",
        "-f",
        "s16le",
        "pipe:1",
    ]


class SubprocessPCMStream(PCMStream):
    """
    PCM read from a running subprocess's stdout.

    Chunks are read on demand, so the OS pipe throttles the producer when the
    consumer is slow. A timer kills the process if it is still running at
    the deadline; the stream then raises TranscodeError instead of ending
    normally. Output left by a producer that already exited is still drained.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        source_name: str,
        stderr_path: Path,
        deadline_seconds: float,
        chunk_size: int,
    ):
        self._process = process
        self._source_name = source_name
        self._stderr_path = stderr_path
        self._chunk_size = chunk_size
        self._bytes_read = 0
        self._closed = False
        self._expired = threading.Event()
        self._timer = threading.Timer(deadline_seconds, self._expire)
        self._timer.daemon = True
        self._timer.start()

    @property
    def bytes_read(self) -> int:
        return self._bytes_read

    @property
    def timed_out(self) -> bool:
        return self._expired.is_set()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            try:
                chunk = self._process.stdout.read(self._chunk_size)
            except (OSError, ValueError) as e:
                logger.exception(
                    "Reading transcoder output failed",
                    extra={"attachment": self._source_name},
                )
                raise TranscodeError(self._source_name, e) from e
            if not chunk:
                break
            self._bytes_read += len(chunk)
            yield chunk

        if self.timed_out:
            raise TranscodeError(
                self._source_name,
                TimeoutError("Transcode deadline exceeded"),
            )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._timer.cancel()
        if self._process.poll() is None:
            self._process.kill()
        returncode = self._process.wait()
        if self._process.stdout:
            self._process.stdout.close()

        if returncode != 0 and not self.timed_out:
            logger.warning(
                "ffmpeg exited with non-zero status",
                extra={
                    "attachment": self._source_name,
                    "returncode": returncode,
                    "pcm_bytes": self._bytes_read,
                    "stderr": self._stderr_tail(),
                },
            )
        else:
            logger.info(
                "Transcode finished",
                extra={
                    "attachment": self._source_name,
                    "returncode": returncode,
                    "pcm_bytes": self._bytes_read,
                    "timed_out": self.timed_out,
                },
            )

    def _expire(self) -> None:
        """Timer callback: kills the producer if it is still running at the deadline."""
        if self._process.poll() is not None:
            return
        self._expired.set()
        logger.warning(
            "Transcode deadline exceeded, killing ffmpeg",
            extra={"attachment": self._source_name},
        )
        self._process.kill()

    def _stderr_tail(self) -> str:
        try:
            data = self._stderr_path.read_bytes()
        except OSError:
            return ""
        return data[-STDERR_TAIL_BYTES:].decode("utf-8", errors="replace")


class FfmpegTranscoder(AudioTranscoder):
    """Normalizes arbitrary audio into canonical PCM with ffmpeg."""

    def __init__(self, config: TranscoderConfig):
        self._config = config

    def transcode(self, artifact_path: Path) -> SubprocessPCMStream:
        command = build_ffmpeg_command(self._config.ffmpeg_path, artifact_path)
        stderr_path = artifact_path.with_name(artifact_path.name + ".ffmpeg.log")

        try:
            with open(stderr_path, "wb") as stderr_file:
                process = subprocess.Popen(
                    command,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                )
        except OSError as e:
            logger.exception(
                "Could not launch ffmpeg",
                extra={
                    "attachment": artifact_path.name,
                    "ffmpeg_path": self._config.ffmpeg_path,
                },
            )
            raise TranscodeError(artifact_path.name, e) from e

        logger.info(
            "Transcode started",
            extra={"attachment": artifact_path.name, "pid": process.pid},
        )
        return SubprocessPCMStream(
            process=process,
            source_name=artifact_path.name,
            stderr_path=stderr_path,
            deadline_seconds=self._config.deadline_seconds,
            chunk_size=self._config.chunk_size,
        )
