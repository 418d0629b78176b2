# src/services/result_bridge.py

"""
Conversion between engine dataclasses and the camelCase JSON shape used by
the remote analysis API (`POST /flights/analyze`) and the UI's JSON views.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from core.errors import DataSourceError
from core.models import (
    BestDeal,
    ChartPoint,
    ComparisonPoint,
    Flight,
    FlightAnalysisResult,
    PriceComparison,
    PriceRange,
    RecommendedPeriod,
    SearchParams,
    SeasonData,
)


def _iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d else None


def search_params_to_request(params: SearchParams) -> Dict[str, Any]:
    return {
        "origin": params.origin,
        "destination": params.destination,
        "durationRange": {"min": params.duration_range.min, "max": params.duration_range.max},
        "selectedAirlines": list(params.selected_airlines),
        "startDate": _iso(params.start_date),
        "endDate": _iso(params.end_date),
        "tripType": params.trip_type,
        "passengerCount": params.passenger_count,
    }


def _comparison_to_dict(point: ComparisonPoint) -> Dict[str, Any]:
    return {
        "date": point.date,
        "price": point.price,
        "difference": point.difference,
        "percentage": point.percentage,
    }


def analysis_to_dict(result: FlightAnalysisResult) -> Dict[str, Any]:
    rp = result.recommended_period
    return {
        "recommendedPeriod": {
            "startDate": rp.start_date,
            "endDate": rp.end_date,
            "returnDate": rp.return_date,
            "price": rp.price,
            "airline": rp.airline,
            "season": rp.season,
            "savings": rp.savings,
        },
        "seasons": [
            {
                "type": s.type,
                "months": list(s.months),
                "priceRange": {"min": s.price_range.min, "max": s.price_range.max},
                "bestDeal": {
                    "dates": s.best_deal.dates,
                    "price": s.best_deal.price,
                    "airline": s.best_deal.airline,
                },
                "description": s.description,
            }
            for s in result.seasons
        ],
        "priceComparison": {
            "ifGoBefore": _comparison_to_dict(result.price_comparison.if_go_before),
            "ifGoAfter": _comparison_to_dict(result.price_comparison.if_go_after),
        },
        "priceChartData": [
            {
                "startDate": p.start_date,
                "returnDate": p.return_date,
                "price": p.price,
                "season": p.season,
                "duration": p.duration,
                "travelDate": _iso(p.travel_date),
            }
            for p in result.price_chart_data
        ],
    }


def _comparison_from_dict(d: Dict[str, Any]) -> ComparisonPoint:
    return ComparisonPoint(
        date=str(d.get("date", "")),
        price=float(d["price"]),
        difference=float(d.get("difference", 0)),
        percentage=int(d.get("percentage", 0)),
    )


def analysis_from_dict(payload: Dict[str, Any]) -> FlightAnalysisResult:
    """Parse an API response body; any missing or malformed field is a DataSourceError."""
    try:
        rp = payload["recommendedPeriod"]
        comparison = payload["priceComparison"]
        return FlightAnalysisResult(
            recommended_period=RecommendedPeriod(
                start_date=str(rp["startDate"]),
                end_date=str(rp.get("endDate", "")),
                return_date=str(rp.get("returnDate", "")),
                price=float(rp["price"]),
                airline=str(rp["airline"]),
                season=str(rp["season"]),
                savings=float(rp.get("savings", 0)),
            ),
            seasons=tuple(
                SeasonData(
                    type=str(s["type"]),
                    months=tuple(s.get("months", [])),
                    price_range=PriceRange(
                        float(s["priceRange"]["min"]), float(s["priceRange"]["max"])),
                    best_deal=BestDeal(
                        dates=str(s["bestDeal"]["dates"]),
                        price=float(s["bestDeal"]["price"]),
                        airline=str(s["bestDeal"]["airline"]),
                    ),
                    description=str(s.get("description", "")),
                )
                for s in payload["seasons"]
            ),
            price_comparison=PriceComparison(
                if_go_before=_comparison_from_dict(comparison["ifGoBefore"]),
                if_go_after=_comparison_from_dict(comparison["ifGoAfter"]),
            ),
            price_chart_data=tuple(
                ChartPoint(
                    start_date=str(p["startDate"]),
                    return_date=str(p.get("returnDate", "")),
                    price=float(p["price"]),
                    season=str(p["season"]),
                    duration=int(p.get("duration") or 0),
                    travel_date=date.fromisoformat(
                        p["travelDate"]) if p.get("travelDate") else None,
                )
                for p in payload.get("priceChartData", [])
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DataSourceError(f"Malformed analysis response: {e!r}") from e


def flights_from_dicts(rows: List[Dict[str, Any]]) -> List[Flight]:
    try:
        return [
            Flight(
                airline=str(r["airline"]),
                flight_number=str(r["flightNumber"]),
                departure_time=str(r["departureTime"]),
                arrival_time=str(r["arrivalTime"]),
                duration=str(r["duration"]),
                price=float(r["price"]),
                date=str(r.get("date", "")),
                direction=str(r.get("direction", "OUT")),
            )
            for r in rows
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise DataSourceError(f"Malformed flight list response: {e!r}") from e


def flights_to_records(flights: List[Flight]) -> List[Dict[str, Any]]:
    """Flat rows for st.dataframe."""
    return [
        {
            "airline": f.airline,
            "flightNumber": f.flight_number,
            "departureTime": f.departure_time,
            "arrivalTime": f.arrival_time,
            "duration": f.duration,
            "price": f.price,
            "date": f.date,
            "direction": f.direction,
        }
        for f in flights
    ]
