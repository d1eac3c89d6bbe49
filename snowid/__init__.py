# -*- coding: utf-8 -*-
from .utils import LogSuppress, base62, base36
from .snowflake import (
    IdGenerator, Snowflake, SnowflakeError, InvalidConfiguration, ClockRegression, ClockStalled,
    epoch, make, parse_id, format_id, extract_datetime, from_datetime,
)
