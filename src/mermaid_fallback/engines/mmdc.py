"""Primary engine backed by the mermaid-cli ``mmdc`` executable."""

from __future__ import annotations

import asyncio
import shutil
import tempfile
from pathlib import Path

from mermaid_fallback.engines.base import EngineOutput
from mermaid_fallback.errors import EngineRejection
from mermaid_fallback.logging import get_logger

logger = get_logger(__name__)


class MermaidCliEngine:
    """Runs ``mmdc -i <in>.mmd -o <out>.svg`` in a scratch directory.

    A missing executable, a non-zero exit status or an empty SVG all raise
    EngineRejection carrying the diagram id and mmdc's stderr.
    """

    def __init__(self, executable: str = "mmdc", extra_args: tuple[str, ...] = ()) -> None:
        self.executable = executable
        self.extra_args = tuple(extra_args)

    async def render(self, unique_id: str, text: str) -> EngineOutput:
        path = shutil.which(self.executable)
        if path is None:
            raise EngineRejection(unique_id, f"executable not found: {self.executable}")

        with tempfile.TemporaryDirectory(prefix="mermaid-fallback-") as tmp:
            input_file = Path(tmp) / f"{unique_id}.mmd"
            output_file = Path(tmp) / f"{unique_id}.svg"
            input_file.write_text(text, encoding="utf-8")

            cmd = [path, "-i", str(input_file), "-o", str(output_file), "--quiet", *self.extra_args]
            logger.debug("running %s", " ".join(cmd))
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate()

            if proc.returncode != 0:
                detail = stderr.decode("utf-8", errors="replace").strip()
                raise EngineRejection(unique_id, detail or f"mmdc exited with status {proc.returncode}", returncode=proc.returncode)
            if not output_file.exists():
                raise EngineRejection(unique_id, "mmdc produced no output")
            svg = output_file.read_text(encoding="utf-8")

        if not svg.strip():
            raise EngineRejection(unique_id, "mmdc produced an empty SVG")
        return EngineOutput(svg=svg)
