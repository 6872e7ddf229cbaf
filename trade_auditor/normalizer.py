import logging
from typing import Any, Dict, Iterable, Mapping

from .config import (
    CLOSE_DATE_FIELD, OPEN_DATE_FIELD, GAINLOSS_FIELD, PROCEEDS_FIELD,
    COST_FIELD, QUANTITY_FIELD, SYMBOL_FIELD, KNOWN_FIELDS,
)
from .exceptions import RowNormalizationError
from .models import CanonicalTrade, NormalizationReport, NormalizationResult, RowFailure, RowSuccess
from .parsers import parse_currency, parse_date, parse_quantity

logger = logging.getLogger(__name__)


class TradeNormalizer:
    """
    Converts raw CSV rows into canonical trades.

    Each row is handled on its own: a row that cannot be converted is
    reported as a RowFailure and left out, the rest carry on. Successful
    trades are returned sorted by close date with ties kept in input order.
    """

    def normalize_row(self, row: Mapping[str, Any], index: int = 0) -> NormalizationResult:
        try:
            trade = self._to_trade(row)
        except RowNormalizationError as e:
            return RowFailure(index=index, row=dict(row), error=str(e), field=e.field)
        except (ValueError, TypeError, OverflowError) as e:
            return RowFailure(index=index, row=dict(row), error=str(e))
        return RowSuccess(index=index, trade=trade)

    def normalize(self, rows: Iterable[Mapping[str, Any]]) -> NormalizationReport:
        report = NormalizationReport()

        for i, row in enumerate(rows):
            result = self.normalize_row(row, i)
            if result.ok:
                report.trades.append(result.trade)
            else:
                where = f" [{result.field}]" if result.field else ""
                logger.warning(f"Error processing row {i}{where}: {result.error} ({result.row})")
                report.failures.append(result)

        # list.sort is stable, so equal close dates keep their input order.
        report.trades.sort(key=lambda t: t.close_date)

        if report.failures:
            logger.info(f"Dropped {len(report.failures)} of {report.total_rows} rows during normalization")
        return report

    def _to_trade(self, row: Mapping[str, Any]) -> CanonicalTrade:
        symbol = row.get(SYMBOL_FIELD)
        if symbol is None or not str(symbol).strip():
            raise RowNormalizationError("Missing symbol", field=SYMBOL_FIELD)

        extra: Dict[str, Any] = {k: v for k, v in row.items() if k not in KNOWN_FIELDS}

        return CanonicalTrade(
            close_date=self._parse_date_field(row, CLOSE_DATE_FIELD),
            open_date=self._parse_date_field(row, OPEN_DATE_FIELD),
            symbol=str(symbol),
            gross_gain_loss=parse_currency(row.get(GAINLOSS_FIELD)),
            proceeds=parse_currency(row.get(PROCEEDS_FIELD)),
            cost=parse_currency(row.get(COST_FIELD)),
            quantity=parse_quantity(row.get(QUANTITY_FIELD)),
            extra=extra,
        )

    @staticmethod
    def _parse_date_field(row: Mapping[str, Any], name: str):
        try:
            return parse_date(row.get(name))
        except RowNormalizationError as e:
            raise RowNormalizationError(str(e), field=name) from e


def normalize(rows: Iterable[Mapping[str, Any]]) -> NormalizationReport:
    return TradeNormalizer().normalize(rows)
