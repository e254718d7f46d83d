"""
config.py — Runtime Configuration
=================================
Every tunable of the visualizer in one dataclass.  `Config.from_env()`
overlays STEPVIZ_* environment variables on the defaults:

    STEPVIZ_DELAY_SCALE=0.2 STEPVIZ_LOG_LEVEL=DEBUG python main.py
"""

import os
from dataclasses import dataclass, fields


@dataclass
class Config:
    delay_scale:       float = 1.0      # multiplies every step delay; 0 = no pauses
    default_speed:     int   = 5        # 1 (slow) .. 10 (fast)
    stop_join_timeout: float = 2.0      # seconds stop() waits for the worker
    min_array_size:    int   = 5
    max_array_size:    int   = 100
    min_nodes:         int   = 3
    max_nodes:         int   = 12
    keep_snapshots:    bool  = False    # recorder keeps every snapshot of a run
    log_level:         str   = "INFO"
    secret_key:        str   = "stepviz-dev"
    host:              str   = "127.0.0.1"
    port:              int   = 5000

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(f"STEPVIZ_{f.name.upper()}")
            if raw is None:
                continue
            values[f.name] = _coerce(f.name, raw, f.type)
        return cls(**values)


def _coerce(name: str, raw: str, kind):
    kind = kind if isinstance(kind, type) else {"float": float, "int": int, "bool": bool}.get(kind, str)
    if kind is bool:
        return raw.strip().lower() in ("1", "true", "yes", "on")
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"STEPVIZ_{name.upper()}: cannot read {raw!r} as {kind.__name__}") from None
