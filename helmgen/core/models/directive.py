"""
Directive model — one `helm:generate` match found during a walk.

A directive lives only as long as it takes to expand and run it. The
walker keeps the list around so callers can report what ran.
"""

from __future__ import annotations

from pydantic import BaseModel

# Names of the variables exposed to the expansion and the generator process.
ENV_COMMAND = "HELM_GENERATE_COMMAND"
ENV_FILE = "HELM_GENERATE_FILE"
ENV_DIR = "HELM_GENERATE_DIR"
ENV_COMMAND_EXPANDED = "HELM_GENERATE_COMMAND_EXPANDED"


class Directive(BaseModel):
    """A parsed generator directive and where it came from."""

    command: str            # raw template, as written after the keyword
    path: str               # file containing the directive
    root: str               # directory the walk started from
    expanded: str = ""      # command after variable expansion

    def variables(self) -> dict[str, str]:
        """The HELM_GENERATE_* variables describing this match.

        ``HELM_GENERATE_COMMAND_EXPANDED`` is only included once the
        directive has been expanded.
        """
        values = {
            ENV_COMMAND: self.command,
            ENV_FILE: self.path,
            ENV_DIR: self.root,
        }
        if self.expanded:
            values[ENV_COMMAND_EXPANDED] = self.expanded
        return values
