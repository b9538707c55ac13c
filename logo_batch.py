"""
BATCH LOGO LOOKUP
---------------------------------------------------------
Runs the resolver over a list of company names, a few at a
time, and keeps one LogoRecord per name.

Records are immutable; every status change swaps in a whole
new tuple so readers always see a consistent snapshot.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from typing import Optional

from domains import company_to_domain
from logo_resolver import next_source_index, resolve_logo
from logo_sources import TOTAL_SOURCES

logger = logging.getLogger(__name__)

# ========== CONFIGURATION ==========
BATCH_SIZE = 5  # companies resolved at the same time

PENDING = "pending"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class LogoRecord:
    company: str
    domain: str
    status: str = PENDING
    content: Optional[bytes] = None
    content_type: Optional[str] = None
    source: Optional[str] = None
    source_index: Optional[int] = None


def parse_companies(text):
    """One company per line or comma; blanks dropped."""
    return [name.strip() for name in re.split(r"[\n,]", text or "") if name.strip()]


def record_from_result(record, result, requested_index=None):
    if result.found:
        return replace(
            record,
            status=SUCCESS,
            content=result.content,
            content_type=result.content_type,
            source=result.source_name,
            source_index=result.source_index,
        )
    # keep the index we asked for so the next retry moves past it
    return replace(
        record,
        status=ERROR,
        content=None,
        content_type=None,
        source=None,
        source_index=requested_index,
    )


class LogoBatch:
    def __init__(self, companies, batch_size=BATCH_SIZE, resolver=None, on_update=None, source_indices=None):
        self.batch_size = max(1, batch_size)
        self.resolver = resolver or resolve_logo
        self.on_update = on_update
        self._records = tuple(LogoRecord(c, company_to_domain(c)) for c in companies)
        # per-record source pin for single-source lookups; None runs the full chain
        self.source_indices = tuple(source_indices or (None,) * len(self._records))
        if len(self.source_indices) != len(self._records):
            raise ValueError("source_indices must match companies one to one")

    @property
    def records(self):
        return self._records

    def __len__(self):
        return len(self._records)

    def _set(self, updates):
        """Replace the snapshot with `updates` ({index: record}) applied."""
        self._records = tuple(updates.get(i, r) for i, r in enumerate(self._records))
        if self.on_update:
            self.on_update(self._records)

    def run(self, **resolve_kwargs):
        """
        Resolve every record, batch_size at a time.

        Each chunk starts only after the previous one has finished.
        Returns the final snapshot in input order.
        """
        total = len(self._records)
        for start in range(0, total, self.batch_size):
            chunk = range(start, min(start + self.batch_size, total))
            self._set({i: replace(self._records[i], status=LOADING) for i in chunk})

            with ThreadPoolExecutor(max_workers=len(chunk)) as pool:
                futures = {pool.submit(self._resolve, i, resolve_kwargs): i for i in chunk}
                for future in as_completed(futures):
                    i = futures[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        logger.error(f"{self._records[i].company}: lookup crashed: {e}")
                        self._set({i: replace(self._records[i], status=ERROR)})
                        continue
                    self._set({i: record_from_result(self._records[i], result, self.source_indices[i])})

        logger.info(f"Batch done: {len(self.successes())}/{total} logos found")
        return self._records

    def _resolve(self, i, resolve_kwargs):
        if self.source_indices[i] is None:
            return self.resolver(self._records[i].company, **resolve_kwargs)
        return self.resolver(self._records[i].company, source_index=self.source_indices[i])

    def retry(self, index):
        """Re-resolve one record using only the next source in the cycle."""
        record = self._records[index]
        source_index = next_source_index(record.source_index, TOTAL_SOURCES)
        self._set({index: replace(record, status=LOADING)})

        try:
            result = self.resolver(record.company, source_index=source_index)
        except Exception as e:
            logger.error(f"{record.company}: retry crashed: {e}")
            self._set({index: replace(self._records[index], status=ERROR, source_index=source_index)})
            return self._records[index]

        self._set({index: record_from_result(self._records[index], result, source_index)})
        return self._records[index]

    def successes(self):
        return [r for r in self._records if r.status == SUCCESS]
