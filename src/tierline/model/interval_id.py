# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

IntervalId: TypeAlias = str


def generate_interval_id() -> IntervalId:
    return str(uuid.uuid4())
