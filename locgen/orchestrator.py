"""Pipeline orchestration: config -> sources -> declarations -> file."""

from __future__ import annotations

import difflib
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import DeclarationConfig, LocgenConfig, load_config
from .generator import create_generation_config, generate_client_declarations
from .logging import get_logger
from .sources import SourceAdapter, SourceError, resolve_source
from .stores import SourceCache

SourceResolver = Callable[[str, Path, bool], List[SourceAdapter]]


@dataclass
class GenerationOutcome:
    """Result of a generation run."""

    path: Path
    text: str
    diff: str
    changed: bool
    dry_run: bool
    clients: int


def _default_resolver(spec: str, base_dir: Path, fresh: bool) -> List[SourceAdapter]:
    return resolve_source(spec, base_dir, fresh=fresh)


class Orchestrator:
    """Coordinates loading, generation and writing of declaration files."""

    def __init__(
        self,
        cache: SourceCache | None = None,
        resolver: SourceResolver | None = None,
    ) -> None:
        self.cache = cache or SourceCache()
        self._resolver = resolver or _default_resolver
        self.logger = get_logger("orchestrator")

    def resolve_config(
        self,
        path: str | Path = ".",
        *,
        sources: Optional[Sequence[str]] = None,
        out: Optional[str | Path] = None,
        listen_path: Optional[str | Path] = None,
        namespace: Optional[str] = None,
        interface: Optional[str] = None,
        strict: Optional[bool] = None,
    ) -> LocgenConfig:
        """Load ``.locgen.yml`` under ``path`` and apply command-line overrides."""
        config = load_config(Path(path))
        changes: dict[str, object] = {}
        if sources:
            changes["sources"] = list(sources)
        if out is not None:
            changes["out"] = self._absolute(out, config.root)
        if listen_path is not None:
            changes["listen_path"] = self._absolute(listen_path, config.root)
        if namespace or interface:
            changes["declaration"] = DeclarationConfig(
                namespace=namespace or config.declaration.namespace,
                interface=interface or config.declaration.interface,
            )
        if strict is not None:
            changes["strict"] = strict
        return replace(config, **changes) if changes else config

    def load_sources(self, config: LocgenConfig) -> List[SourceAdapter]:
        """Resolve every configured source spec, reusing cached results."""
        if not config.sources:
            raise SourceError(
                "No locale sources configured. Pass --source or set `sources` in .locgen.yml."
            )
        sources: List[SourceAdapter] = []
        for spec in config.sources:
            resolved = self.cache.get_or_load(
                spec, lambda key, fresh: self._resolver(key, config.root, fresh)
            )
            sources.extend(resolved)
        if not sources:
            raise SourceError("No locale sources found")
        return sources

    def run_generate(self, config: LocgenConfig, *, dry_run: bool = False) -> GenerationOutcome:
        """Generate declarations for ``config`` and write them unless ``dry_run``."""
        self.logger.info("Loading locale sources")
        sources = self.load_sources(config)
        self.logger.info("Found %d client source(s)", len(sources))

        generation = create_generation_config(
            sources,
            config.output_path,
            namespace=config.declaration.namespace,
            interface=config.declaration.interface,
            strict=config.strict,
            max_workers=config.max_workers,
        )
        self.logger.info("Generating declarations")
        declarations = generate_client_declarations(generation)
        for declaration in declarations:
            self.logger.debug(
                "Rendered %s (%d root keys)",
                declaration.metadata.get("source"),
                declaration.metadata.get("keys", 0),
            )
        text = "\n\n".join(declaration.text for declaration in declarations) + "\n"

        output_path = config.output_path
        previous = self._read_existing(output_path)
        diff = self._build_diff(previous or "", text, output_path)
        changed = previous != text

        if dry_run:
            self.logger.info("Dry run: %s not written", output_path)
        elif changed:
            self._write(output_path, text)
            self.logger.info("Types generated: %s", output_path)
        else:
            self.logger.info("%s already up to date", output_path)

        return GenerationOutcome(
            path=output_path,
            text=text,
            diff=diff,
            changed=changed,
            dry_run=dry_run,
            clients=len(declarations),
        )

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _absolute(value: str | Path, root: Path) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else (root / path)

    @staticmethod
    def _read_existing(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _build_diff(before: str, after: str, path: Path) -> str:
        diff = difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{path.name} (current)",
            tofile=f"{path.name} (generated)",
        )
        return "".join(diff)

    @staticmethod
    def _write(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers never observe a partially written declaration file.
        temp_path = path.with_name(f".{path.name}.tmp")
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, path)


__all__ = ["GenerationOutcome", "Orchestrator"]
