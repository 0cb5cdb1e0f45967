"""
Signal payload assembler: the contract surface with the decision step.

Serializes the primary CandleSeries and its indicators into the two JSON
documents the model reads (``ohlcData`` / ``indicatorData``), attaches the
primary chart snapshot and any ``chartDataUri_<timeframe>`` snapshots, and
carries the user's preferences plus optional fundamental / macro context.
"""

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import CandleSeries, IndicatorSet, MultiTimeframeBundle
from core.timeframes import CHART_URI_PREFIX, additional_chart_uris

RiskProfile = Literal["conservative", "moderate", "aggressive"]

ADDITIONAL_CHART_PREFIX = CHART_URI_PREFIX


def _dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), allow_nan=False)


def ohlc_payload(series: CandleSeries, include_volume: bool = True) -> List[dict]:
    """``[{time, open, high, low, close[, volume]}, ...]`` in chronological order."""
    return [candle.to_dict(include_volume=include_volume) for candle in series]


def indicator_payload(indicators: IndicatorSet) -> Dict[str, Any]:
    """Indicator document keyed by indicator name; disabled indicators are omitted."""
    payload: Dict[str, Any] = {}
    if indicators.sma is not None:
        payload["sma"] = [p.to_dict() for p in indicators.sma]
    if indicators.rsi is not None:
        payload["rsi"] = [p.to_dict() for p in indicators.rsi]
    if indicators.macd is not None:
        payload["macd"] = {
            "macdLine": [p.to_dict() for p in indicators.macd.macd_line],
            "signalLine": [p.to_dict() for p in indicators.macd.signal_line],
            "histogram": [p.to_dict() for p in indicators.macd.histogram],
        }
    if indicators.bollinger is not None:
        payload["bollinger"] = [p.to_dict() for p in indicators.bollinger]
    return payload


class AiPreferences(BaseModel):
    """How the user wants the signal tailored."""

    risk_profile: RiskProfile = Field(
        default="moderate",
        description="The user's risk profile for trading.",
    )
    detailed_analysis: bool = Field(
        default=True,
        description="Step-by-step breakdown when true, a brief summary otherwise.",
    )


class SignalRequest(BaseModel):
    """Input document for the decision step (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    chart_data_uri: str = Field(alias="chartDataUri")
    ohlc_data: str = Field(alias="ohlcData")
    indicator_data: str = Field(alias="indicatorData")
    risk_profile: RiskProfile = Field(alias="riskProfile")
    detailed_analysis: bool = Field(alias="detailedAnalysis")
    fundamental_analysis_summary: Optional[str] = Field(default=None, alias="fundamentalAnalysisSummary")
    economic_events_summary: Optional[str] = Field(default=None, alias="economicEventsSummary")

    def additional_charts(self) -> Dict[str, str]:
        """``chartDataUri_<timeframe>`` entries, in insertion order."""
        extra = self.model_extra or {}
        return {k: v for k, v in extra.items() if k.startswith(ADDITIONAL_CHART_PREFIX)}

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def assemble_signal_request(
    bundle: MultiTimeframeBundle,
    preferences: AiPreferences,
    fundamental_summary: Optional[str] = None,
    economic_summary: Optional[str] = None,
) -> SignalRequest:
    """Build the decision-step input from a finished multi-timeframe bundle."""
    primary = bundle.primary
    return SignalRequest(
        chartDataUri=primary.chart_data_uri,
        ohlcData=_dumps(ohlc_payload(primary.series)),
        indicatorData=_dumps(indicator_payload(primary.indicators)),
        riskProfile=preferences.risk_profile,
        detailedAnalysis=preferences.detailed_analysis,
        fundamentalAnalysisSummary=fundamental_summary or None,
        economicEventsSummary=economic_summary or None,
        **additional_chart_uris(bundle),
    )
