"""Exit-code contract for the ``repo-snapshot`` CLI.

Code  Meaning
----  -------
  0   Success (artifacts written / instance valid)
  1   Violation (``validate`` found a schema mismatch)
  2   Error (bad options, unresolvable root, unreadable file)
130   Interrupted (scan cancelled; partial artifacts were still written)
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
    INTERRUPTED = 130
