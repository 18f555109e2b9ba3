"""Topic buckets for grouping task entries in the generated reference."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from .models import Entry

FALLBACK_CATEGORY = "Other"

DEFAULT_CATEGORIES: Dict[str, List[str]] = {
    "Data Fetching": [
        "HttpTask",
        "WebsocketTask",
        "SolanaAccountDataFetchTask",
        "AnchorFetchTask",
        "SplTokenParseTask",
        "SolanaToken2022ExtensionTask",
    ],
    "Parsing": [
        "JsonParseTask",
        "RegexExtractTask",
        "BufferLayoutParseTask",
        "CronParseTask",
        "StringMapTask",
    ],
    "Mathematical Operations": [
        "AddTask",
        "SubtractTask",
        "MultiplyTask",
        "DivideTask",
        "PowTask",
        "MaxTask",
        "MinTask",
        "MeanTask",
        "MedianTask",
        "RoundTask",
        "BoundTask",
    ],
    "DeFi & DEX": [
        "JupiterSwapTask",
        "SerumSwapTask",
        "MeteoraSwapTask",
        "UniswapExchangeRateTask",
        "SushiswapExchangeRateTask",
        "PancakeswapExchangeRateTask",
        "CurveFinanceTask",
        "LpExchangeRateTask",
        "LpTokenPriceTask",
        "PumpAmmTask",
        "PumpAmmLpTokenPriceTask",
        "TitanTask",
        "KuruTask",
        "MaceTask",
        "HyloTask",
    ],
    "LST & Staking": [
        "SanctumLstPriceTask",
        "SplStakePoolTask",
        "MarinadeStateTask",
        "LstHistoricalYieldTask",
        "VsuiPriceTask",
        "SuiLstPriceTask",
        "SolayerSusdTask",
    ],
    "Oracle Integration": [
        "OracleTask",
        "SwitchboardSurgeTask",
        "SurgeTwapTask",
        "TwapTask",
        "EwmaTask",
    ],
    "Specialized Finance": [
        "LendingRateTask",
        "MapleFinanceTask",
        "OndoUsdyTask",
        "TurboEthRedemptionRateTask",
        "ExponentTask",
        "ExponentPTLinearPricingTask",
        "PerpMarketTask",
        "KalshiApiTask",
    ],
    "Utilities": [
        "ValueTask",
        "CacheTask",
        "ConditionalTask",
        "ComparisonTask",
        "SecretsTask",
        "UnixTimeTask",
        "SysclockOffsetTask",
        "Blake2b128Task",
    ],
    "Protocol-Specific": [
        "XStepPriceTask",
        "GlyphTask",
        "CorexTask",
        "BitFluxTask",
        "FragmetricTask",
        "AftermathTask",
        "EtherfuseTask",
    ],
}


class CategoryIndex:
    """Routes entry names to their configured category."""

    def __init__(
        self,
        categories: Mapping[str, Sequence[str]] | None = None,
        *,
        fallback: str = FALLBACK_CATEGORY,
    ) -> None:
        source = DEFAULT_CATEGORIES if categories is None else categories
        self.fallback = fallback
        self._lookup: Dict[str, str] = {}
        self._order: List[str] = []
        for category, names in source.items():
            if category not in self._order:
                self._order.append(category)
            for name in names:
                # first bucket listing a name claims it
                self._lookup.setdefault(name, category)
        if fallback in self._order:
            self._order.remove(fallback)
        self._order.append(fallback)

    @property
    def order(self) -> List[str]:
        """Category headings in render order, fallback last."""
        return list(self._order)

    def categorize(self, name: str) -> str:
        return self._lookup.get(name, self.fallback)

    def group(self, entries: Iterable[Entry]) -> Dict[str, List[Entry]]:
        """Bucket entries by category in render order, omitting empty buckets."""
        buckets: Dict[str, List[Entry]] = {category: [] for category in self._order}
        for entry in entries:
            buckets[self.categorize(entry.name)].append(entry)
        grouped: Dict[str, List[Entry]] = {}
        for category in self._order:
            members = buckets[category]
            if members:
                grouped[category] = sorted(members, key=lambda item: (item.name.lower(), item.name))
        return grouped


__all__ = ["CategoryIndex", "DEFAULT_CATEGORIES", "FALLBACK_CATEGORY"]
