from fastapi import APIRouter, HTTPException, Request
from typing import Dict, Any
from app.db.session import get_session
from app.models.order import Order
from sqlmodel import select, func
import html
import logging
from starlette.responses import HTMLResponse

logger = logging.getLogger(__name__)
router = APIRouter()

_PAGE_STYLE = (
    "body{font-family:Inter,system-ui,-apple-system,'Segoe UI',Roboto;background:#f3f4f6;padding:24px}"
    "table{width:100%;border-collapse:collapse;background:white}"
    "th,td{padding:12px;border-bottom:1px solid #eef2f7;text-align:left}thead{background:#f9fafb}"
    ".card{display:inline-block;background:white;padding:20px;border-radius:8px;margin-right:16px}"
)


def _esc(value: Any) -> str:
    # order fields come from the public checkout form
    return html.escape(str(value))


def _page(title: str, body: str) -> HTMLResponse:
    content = f"<!doctype html><html><head><meta charset='utf-8' /><title>{_esc(title)}</title><style>{_PAGE_STYLE}</style></head>" \
              f"<body><h1>{_esc(title)}</h1>{body}</body></html>"
    return HTMLResponse(content=content)


def _wants_html(request: Request) -> bool:
    return 'text/html' in request.headers.get('accept', '')


def _count(session, *where) -> int:
    stmt = select(func.count()).select_from(Order)
    for clause in where:
        stmt = stmt.where(clause)
    total = session.exec(stmt).one()
    if isinstance(total, tuple):
        total = total[0]
    return int(total or 0)


@router.get("/summary")
async def summary(request: Request) -> Any:
    session = get_session()
    try:
        total = _count(session)
        pending = _count(session, Order.status == "pending")
        revenue = session.exec(select(func.coalesce(func.sum(Order.total), 0)).where(Order.status != "cancelled")).one()
        if isinstance(revenue, tuple):
            revenue = revenue[0]
        revenue = float(revenue or 0)
        untracked = _count(session, Order.tracking_code == None)  # noqa: E711

        if _wants_html(request):
            cards = ''.join(
                f"<div class='card'><div>{_esc(label)}</div><strong>{_esc(value)}</strong></div>"
                for label, value in (("Total Orders", total), ("Revenue", f"৳{revenue:.2f}"),
                                     ("Pending", pending), ("Without Tracking", untracked))
            )
            return _page("Dashboard Summary", cards)

        return {"total_orders": total, "revenue": revenue, "pending": pending, "without_tracking": untracked}
    except Exception as e:
        logger.exception("Failed to compute summary: %s", e)
        raise HTTPException(status_code=500, detail="Failed to compute dashboard summary")
    finally:
        session.close()


@router.get("/orders")
async def orders(request: Request):
    session = get_session()
    try:
        rows = session.exec(select(Order).order_by(Order.created_at)).all()
        result = [{
            "id": o.id,
            "name": o.name,
            "mobile": o.mobile,
            "district": o.district,
            "quantity": o.quantity,
            "total": o.total,
            "status": o.status,
            "tracking_code": o.tracking_code,
            "landing_page": o.landing_page,
        } for o in rows]

        if _wants_html(request):
            rows_html = ''.join(
                f"<tr><td>{_esc(r['id'])}</td><td>{_esc(r['name'])}</td><td>{_esc(r['district'])}</td>"
                f"<td>{_esc(r['quantity'])}</td><td>{_esc(r['total'])}</td><td>{_esc(r['status'])}</td>"
                f"<td>{_esc(r['tracking_code'] or '—')}</td></tr>"
                for r in result
            )
            table = "<table><thead><tr><th>ID</th><th>Name</th><th>District</th><th>Qty</th><th>Total</th>" \
                    f"<th>Status</th><th>Tracking</th></tr></thead><tbody>{rows_html}</tbody></table>"
            return _page("Orders", table)

        return result
    finally:
        session.close()


@router.get("/stats")
async def stats(request: Request):
    session = get_session()
    try:
        rows = session.exec(select(Order)).all()
        by_status: Dict[str, int] = {}
        by_landing_page: Dict[str, int] = {}
        for o in rows:
            by_status[o.status or "unknown"] = by_status.get(o.status or "unknown", 0) + 1
            by_landing_page[o.landing_page] = by_landing_page.get(o.landing_page, 0) + 1

        if _wants_html(request):
            items = ''.join([f"<li><strong>{_esc(k)}</strong>: {_esc(v)}</li>" for k, v in by_status.items()])
            return _page("Stats", f"<ul>{items}</ul>")

        return {"by_status": by_status, "by_landing_page": by_landing_page}
    finally:
        session.close()
