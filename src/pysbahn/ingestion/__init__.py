"""Ingestion layer.

Turns raw log lines into envelopes and envelopes into domain records,
and drives the offline analysis pass over a raw frame log.
"""

__all__: list[str] = []
