# -*- coding: utf-8 -*-
"""Core configuration models for distox_lib.

Protocol message models live in :mod:`distox_lib.protocol.models` and shot
models in :mod:`distox_lib.shots.models`.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict


class SessionOptions(BaseModel):
    """Per-connection behaviour of a :class:`~distox_lib.session.DistoXSession`.

    Attributes:
        smart_mode: Detect survey shots from repeated triples. When False,
            every measurement is emitted immediately as a splay.
        acknowledge: Queue an acknowledgement for every frame that carries
            a sequence bit. The device resends a frame until acknowledged.
    """

    model_config = ConfigDict(frozen=True)

    smart_mode: bool = True
    acknowledge: bool = True
