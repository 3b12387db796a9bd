# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public Cowardly API.

`Session` is the programmatic entry point: it performs everything the CLI
does, for one Brave target, without printing anything.

```python
from cowardly.api import Session
from cowardly.store import Variant

session = Session.for_system(Variant.STABLE)
outcome = session.apply_preset("quick")
print(outcome.enforced, len(outcome.bundle))
```
"""

from __future__ import annotations

from cowardly.api.session import Session
from cowardly.api.types import ApplyOutcome, CurrentValue, DriftReport, TargetStatus

__all__: list[str] = [
    "ApplyOutcome",
    "CurrentValue",
    "DriftReport",
    "Session",
    "TargetStatus",
]
