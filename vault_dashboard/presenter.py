"""Display-ready sections of the vault view, built from fetched data.

Each function returns plain dicts of strings so any front end (or the
command line) can lay them out without knowing the API's units.
"""

from typing import Any, Dict, List, Optional

from config import DashboardConfig
from vault_dashboard.models import VaultSnapshot
from vault_dashboard.utils import (
    format_bps,
    format_field,
    format_fraction_percentage,
    format_percentage,
    to_chart_series,
)

NA = DashboardConfig.PLACEHOLDER


def _get(obj: Any, attr: str) -> Any:
    # responses are not validated, a section may be a model, None or anything else
    return getattr(obj, attr, None)


def _percentage_or_na(value: Any) -> str:
    return NA if value is None else format_percentage(value)


def _amount(display: Optional[str], field_name: str, raw: Any) -> str:
    """Prefer the API's own formatted value, fall back to formatting the raw one."""
    return display or format_field(field_name, raw)


def overview(snapshot: VaultSnapshot) -> Dict[str, str]:
    """Header and key metric cards."""
    info = snapshot.info.value
    history = snapshot.history.value

    apy = _get(info, 'apy')
    if apy is None:
        apy = _get(snapshot.apy.value, 'apy')

    rows = {
        "Name": _get(info, 'name') or "Vault",
        "Symbol": _get(info, 'symbol') or NA,
        "Current APY": _percentage_or_na(apy),
    }

    state = _get(history, 'current_state')
    if state is not None:
        rows["Price Per Share"] = format_field('vault_pps', _get(state, 'vault_pps'))
        rows["Total Supply"] = format_field('total_supply', _get(state, 'total_supply'))
        funds = _get(state, 'total_managed_funds')
        if isinstance(funds, list) and funds and isinstance(funds[0], dict):
            rows["Total Value Locked"] = format_field('total_amount', funds[0].get('total_amount'))

    metrics = _get(history, 'metrics')
    if metrics is not None:
        rows["Total Deposits"] = _amount(
            _get(metrics, 'total_deposits_display'), 'total_deposits', _get(metrics, 'total_deposits'))
        rows["Total Withdrawals"] = _amount(
            _get(metrics, 'total_withdrawals_display'), 'total_withdrawals', _get(metrics, 'total_withdrawals'))
        rows["Unique Depositors"] = str(_get(metrics, 'unique_depositors') or 0)

    return rows


def _period_rows(period: Any) -> Dict[str, str]:
    return {
        "APY": _percentage_or_na(_get(period, 'apy')),
        "PPS Change": format_fraction_percentage(_get(period, 'pps_change')),
        "Net Deposits": _amount(
            _get(period, 'net_deposits_display'), 'net_deposits', _get(period, 'net_deposits')),
    }


def performance(history: Any) -> Dict[str, Dict[str, str]]:
    """7-day, 30-day and full-period performance tables; missing windows are left out."""
    metrics = _get(history, 'metrics')
    sections: Dict[str, Dict[str, str]] = {}
    if metrics is None:
        return sections

    if _get(metrics, 'period7d') is not None:
        sections["Last 7 Days"] = _period_rows(metrics.period7d)
    if _get(metrics, 'period30d') is not None:
        sections["Last 30 Days"] = _period_rows(metrics.period30d)

    full = _get(metrics, 'full_period')
    if full is not None:
        sections[f"Full Period ({_get(full, 'days') or 0} days)"] = {
            "Total Return": format_fraction_percentage(_get(full, 'total_return')),
            "Annualized Return": _percentage_or_na(_get(full, 'annualized_return')),
            "Total Gains": _amount(
                _get(full, 'total_gains_display'), 'total_gains', _get(full, 'total_gains')),
        }
    return sections


def vault_details(info: Any) -> Dict[str, Any]:
    """Roles, fee structure, and assets with their strategies."""
    details: Dict[str, Any] = {}

    roles = _get(info, 'roles')
    if roles is not None:
        details["Roles"] = {
            "Manager": _get(roles, 'manager') or NA,
            "Emergency Manager": _get(roles, 'emergency_manager') or NA,
            "Rebalance Manager": _get(roles, 'rebalance_manager') or NA,
            "Fee Receiver": _get(roles, 'fee_receiver') or NA,
        }

    fees = _get(info, 'fees_bps')
    if fees is not None:
        details["Fees"] = {
            "Vault Fee": format_bps(_get(fees, 'vault_fee')),
            "Protocol Fee": format_bps(_get(fees, 'defindex_fee')),
        }

    assets = _get(info, 'assets')
    if isinstance(assets, list) and assets:
        rows: List[Dict[str, Any]] = []
        for index, asset in enumerate(assets):
            strategies = _get(asset, 'strategies') or []
            rows.append({
                "name": _get(asset, 'name') or f"Asset {index + 1}",
                "symbol": _get(asset, 'symbol') or "",
                "address": _get(asset, 'address') or NA,
                "strategies": [
                    {
                        "name": _get(strategy, 'name') or NA,
                        "address": _get(strategy, 'address') or NA,
                        "status": "Paused" if _get(strategy, 'paused') else "Active",
                    }
                    for strategy in strategies
                ],
            })
        details["Assets"] = rows

    return details


def history_table(history: Any) -> List[Dict[str, str]]:
    """One formatted row per chart point."""
    rows = []
    for point in to_chart_series(history):
        rows.append({
            "Date": point.date,
            "PPS": format_field('vault_pps', point.vault_pps),
            "TVL": format_field('total_managed_funds', point.total_managed_funds),
            "Deposits": format_field('deposits', point.deposits),
            "Withdrawals": format_field('withdrawals', point.withdrawals),
            # already scaled to a percentage by the chart series
            "PPS Change": NA if point.pps_change is None else format_percentage(point.pps_change),
        })
    return rows


def _section(title: str, rows: Dict[str, Any]) -> List[str]:
    lines = [title, "-" * len(title)]
    width = max((len(key) for key in rows), default=0)
    lines.extend(f"{key.ljust(width)}  {value}" for key, value in rows.items())
    lines.append("")
    return lines


def render_text(snapshot: VaultSnapshot) -> str:
    """Plain text rendering of the whole vault view."""
    lines: List[str] = []
    lines.extend(_section("Overview", overview(snapshot)))

    for key, message in snapshot.errors.items():
        if message:
            lines.append(f"Could not load {key}: {message}")
    if any(snapshot.errors.values()):
        lines.append("")

    history = snapshot.history.value
    for title, rows in performance(history).items():
        lines.extend(_section(title, rows))

    table = history_table(history)
    if table:
        columns = list(table[0])
        widths = {c: max(len(c), *(len(row[c]) for row in table)) for c in columns}
        lines.append("  ".join(c.ljust(widths[c]) for c in columns))
        for row in table:
            lines.append("  ".join(row[c].ljust(widths[c]) for c in columns))
        lines.append("")

    details = vault_details(snapshot.info.value)
    for title in ("Roles", "Fees"):
        if title in details:
            lines.extend(_section(title, details[title]))
    for asset in details.get("Assets", []):
        header = f"{asset['name']} {asset['symbol']}".strip()
        lines.append(f"{header} ({asset['address']})")
        for strategy in asset["strategies"]:
            lines.append(f"  - {strategy['name']} [{strategy['status']}] {strategy['address']}")

    return "\n".join(lines).rstrip() + "\n"
