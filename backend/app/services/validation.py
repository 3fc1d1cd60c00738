from typing import Any, Dict, List

from app.data.geo import get_district, get_thana

REQUIRED_FIELDS = ("name", "mobile", "district", "thana", "address")


class OrderFormValidator:
    """Validation of the checkout form before an order is assembled.

    Rules:
    - any required field blank -> missing_field:<name>
    - quantity below 1 -> invalid_quantity
    - district id not in the reference data -> unknown_district
    - thana id not inside the chosen district -> unknown_thana

    Values are not normalized; the assembler stores them as entered.
    Issues are returned sorted so responses are deterministic.
    """

    def _add_issue(self, issues: List[str], issue: str) -> None:
        if issue not in issues:
            issues.append(issue)

    def validate(self, form: Dict[str, Any]) -> Dict[str, Any]:
        issues: List[str] = []

        for field in REQUIRED_FIELDS:
            value = form.get(field)
            if value is None or not str(value).strip():
                self._add_issue(issues, f"missing_field:{field}")

        quantity = form.get("quantity")
        try:
            if int(quantity) < 1:
                self._add_issue(issues, "invalid_quantity")
        except (TypeError, ValueError):
            self._add_issue(issues, "invalid_quantity")

        district_id = form.get("district") or ""
        if district_id:
            if get_district(district_id) is None:
                self._add_issue(issues, "unknown_district")
            elif form.get("thana") and get_thana(district_id, form["thana"]) is None:
                self._add_issue(issues, "unknown_thana")

        issues_sorted = sorted(issues)
        return {"valid": not issues_sorted, "issues": issues_sorted}
