"""File-based provider - prompt fragments kept on disk, optionally hot reloaded."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import get_settings
from ..core.exceptions import FileReadError
from ..core.registry import provider_registry
from ..core.templating import substitute_variables
from ..core.types import ProviderConfig, ProviderContext
from .base import PromptProvider, ConfigIssue, require_string, optional_type

logger = logging.getLogger(__name__)

FileSignature = Tuple[float, int]  # (mtime, size)


@provider_registry.register("file-based", metadata={"io": True})
class FileBasedProvider(PromptProvider):
    """
    Reads a prompt fragment from ``config.filePath``.

    Relative paths are resolved against ``config.baseDir``, then the
    directory the configuration was loaded from, then the working directory.
    The last successfully read text is cached: a failed read falls back to
    it, and only raises FileReadError when nothing was ever read.

    With ``watchForChanges`` a background task polls the file signature
    and calls :meth:`reload` on change. While watching, generation serves
    the cache; the cache reference is swapped in a single assignment so a
    reader never sees a partial update. Once the watch task has stopped
    (for instance because the event loop that started it was closed),
    generation reads the file on every call again.
    """

    provider_type = "file-based"
    description = "Text file with {{variable}} substitution and hot reload"

    def __init__(self, provider_config: ProviderConfig, default_base_dir: Optional[str] = None):
        super().__init__(provider_config)
        self._default_base_dir = default_base_dir
        self._cache: Optional[str] = None
        self._signature: Optional[FileSignature] = None
        self._watch_task: Optional[asyncio.Task] = None
        self._reload_lock: Optional[asyncio.Lock] = None
        self.reload_count = 0

    @classmethod
    def _validate(cls, config: Dict[str, Any]) -> List[ConfigIssue]:
        issues = [
            require_string(config, "filePath", allow_empty=False),
            optional_type(config, "baseDir", str, "a string"),
            optional_type(config, "encoding", str, "a string"),
            optional_type(config, "variables", dict, "an object"),
            optional_type(config, "watchForChanges", bool, "a boolean"),
        ]
        poll = config.get("pollInterval")
        if poll is not None and (isinstance(poll, bool) or not isinstance(poll, int) or poll <= 0):
            issues.append(("pollInterval", "must be a positive integer"))
        return [issue for issue in issues if issue]

    @property
    def file_path(self) -> Path:
        """Resolved path of the source file."""
        path = Path(self.config["filePath"]).expanduser()
        if path.is_absolute():
            return path
        base_dir = self.config.get("baseDir") or self._default_base_dir or os.getcwd()
        return Path(base_dir) / path

    @property
    def encoding(self) -> str:
        return self.config.get("encoding") or get_settings().watch.default_encoding

    @property
    def watch_for_changes(self) -> bool:
        return bool(self.config.get("watchForChanges", False))

    @property
    def poll_interval(self) -> float:
        """Seconds between file checks."""
        interval = self.config.get("pollInterval") or get_settings().watch.poll_interval
        return interval / 1000

    @property
    def cached_content(self) -> Optional[str]:
        return self._cache

    @property
    def is_watching(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    async def _setup(self) -> None:
        self._reload_lock = asyncio.Lock()
        try:
            await self.reload()
        except FileReadError as e:
            # Not fatal: generation raises until the file becomes readable.
            logger.warning("Provider '%s': initial read failed: %s", self.name, e.message)

        if self.watch_for_changes:
            self._watch_task = asyncio.create_task(
                self._watch(), name=f"promptcomposer-watch-{self.name}"
            )
            logger.debug("Provider '%s' watching %s", self.name, self.file_path)

    async def _teardown(self) -> None:
        task, self._watch_task = self._watch_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _generate(self, context: ProviderContext) -> str:
        # The watcher only lives as long as the loop it was started in.
        if self.is_watching and self._cache is not None:
            content = self._cache
        else:
            content = await self._read_with_fallback()
        return substitute_variables(content, self.config.get("variables"))

    async def reload(self) -> str:
        """
        Re-read the file and replace the cache.

        This is the change callback used by the watcher.

        Raises:
            FileReadError: If the file cannot be read. The cache is left as is.
        """
        lock = self._reload_lock or asyncio.Lock()
        async with lock:
            content, signature = await self._read()
            self._cache = content
            self._signature = signature
            self.reload_count += 1
            return content

    async def _read_with_fallback(self) -> str:
        try:
            return await self.reload()
        except FileReadError as e:
            cached = self._cache
            if cached is None:
                raise
            logger.warning(
                "Provider '%s': serving cached content, read failed: %s", self.name, e.message
            )
            return cached

    async def _read(self) -> Tuple[str, Optional[FileSignature]]:
        path = self.file_path
        try:
            return await asyncio.to_thread(self._read_file, path, self.encoding)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise FileReadError(
                f"Cannot read '{path}': {e}",
                file_path=str(path),
                provider=self.name,
                cause=e
            ) from e

    @staticmethod
    def _read_file(path: Path, encoding: str) -> Tuple[str, Optional[FileSignature]]:
        # Stat first: a write racing the read then shows up as a changed signature.
        signature = _signature(path)
        with open(path, encoding=encoding) as f:
            content = f.read()
        return content, signature

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            current = await asyncio.to_thread(_signature, self.file_path)
            if current is None or current == self._signature:
                continue
            try:
                await self.reload()
                logger.info("Provider '%s' reloaded %s", self.name, self.file_path)
            except FileReadError as e:
                logger.warning("Provider '%s': reload failed: %s", self.name, e.message)


def _signature(path: Path) -> Optional[FileSignature]:
    try:
        stat = path.stat()
    except OSError:
        return None
    return stat.st_mtime, stat.st_size
