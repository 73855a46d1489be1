"""
Batch validation over a column of strings.

Applies the same chain of rules to every value of a pandas Series, one
fresh Validator per value, and collects the outcomes into a DataFrame.
Useful for re-checking exported form submissions.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Union

import pandas as pd

from .validator import Validator

COLUMNS = ['value', 'passed', 'error_message', 'failed_rule']

_log = logging.getLogger("textcheck.batch")


def _as_text(value: Any) -> str:
    if value is None:
        return ''
    if not isinstance(value, str) and pd.isna(value):
        return ''
    # int columns with missing values come back as float64
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def validate_series(
    values: Union[pd.Series, Iterable[Any]],
    configure: Callable[[Validator], Validator],
    name: Optional[str] = None,
) -> pd.DataFrame:
    """
    Validate every value with the rules chained by ``configure``.

    Args:
        values: Series (or any iterable) of values. Missing values are
            checked as empty strings, everything else through ``str``.
        configure: Receives a new Validator and chains rules onto it.
        name: Validator name; defaults to the Series name.

    Returns:
        DataFrame with one row per value and columns ``value``, ``passed``,
        ``error_message`` and ``failed_rule``, indexed like the input.
    """
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=object)
    if name is None and series.name is not None:
        name = str(series.name)

    rows = []
    for value in series:
        v = Validator(_as_text(value), name=name)
        configure(v)
        v.check()
        report = v.last_report
        rows.append({
            'value': value,
            'passed': report.passed,
            'error_message': report.error_message,
            'failed_rule': report.failed_rule,
        })

    frame = pd.DataFrame(rows, columns=COLUMNS, index=series.index)
    failed = int((~frame['passed']).sum()) if len(frame) else 0
    _log.info(f"Validated {len(frame):,} values for {name or 'series'}: {failed:,} failed")
    return frame


def summarize(frame: pd.DataFrame) -> Dict[str, Any]:
    """Aggregate a ``validate_series`` result into counts per outcome and message."""
    total = len(frame)
    passed = int(frame['passed'].sum()) if total else 0
    messages = frame.loc[~frame['passed'].astype(bool), 'error_message'].value_counts()
    return {
        'total': total,
        'passed': passed,
        'failed': total - passed,
        'pass_rate': round(passed / total, 4) if total > 0 else 1.0,
        'failures_by_message': {str(k): int(v) for k, v in messages.items()},
    }
