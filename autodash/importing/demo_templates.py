"""
Built-in demo datasets, loadable without an upload.

Templates carry a fixed schema, so loading one skips inference.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Dict, List

from autodash.core.dataset import Dataset
from autodash.core.exceptions import UnknownTemplateError
from autodash.core.schema import ColumnType

_SEED = 42
_START = date(2024, 1, 1)


@dataclass(frozen=True)
class DemoTemplate:
    id: str
    name: str
    description: str
    icon: str
    schema: Dict[str, ColumnType]
    build_rows: Callable[[], List[Dict[str, Any]]]

    def to_dataset(self) -> Dataset:
        return Dataset(
            name=self.name,
            columns=list(self.schema),
            rows=self.build_rows(),
            schema=self.schema,
        )


def _sales_rows() -> List[Dict[str, Any]]:
    rng = random.Random(_SEED)
    regions = ["North", "South", "East", "West"]
    products = ["Laptop", "Phone", "Tablet", "Monitor", "Headphones"]
    rows = []
    for i in range(120):
        units = rng.randint(1, 40)
        rows.append({
            "Date": (_START + timedelta(days=i * 3)).isoformat(),
            "Region": rng.choice(regions),
            "Product": rng.choice(products),
            "Units": units,
            "Revenue": round(units * rng.uniform(80, 1200), 2),
        })
    return rows


def _marketing_rows() -> List[Dict[str, Any]]:
    rng = random.Random(_SEED + 1)
    channels = ["Email", "Search", "Social", "Display", "Referral"]
    rows = []
    for i in range(90):
        impressions = rng.randint(1_000, 50_000)
        clicks = int(impressions * rng.uniform(0.005, 0.08))
        rows.append({
            "Date": (_START + timedelta(days=i)).isoformat(),
            "Channel": rng.choice(channels),
            "Impressions": impressions,
            "Clicks": clicks,
            "Conversions": int(clicks * rng.uniform(0.01, 0.15)),
        })
    return rows


def _finance_rows() -> List[Dict[str, Any]]:
    rng = random.Random(_SEED + 2)
    categories = ["Payroll", "Rent", "Software", "Travel", "Marketing", "Utilities"]
    statuses = ["Paid", "Pending", "Overdue"]
    rows = []
    for i in range(100):
        rows.append({
            "Invoice Date": (_START + timedelta(days=i * 2)).isoformat(),
            "Category": rng.choice(categories),
            "Status": rng.choice(statuses),
            "Amount": round(rng.uniform(50, 25_000), 2),
        })
    return rows


def _hr_rows() -> List[Dict[str, Any]]:
    rng = random.Random(_SEED + 3)
    departments = ["Engineering", "Sales", "Support", "Finance", "Operations"]
    levels = ["Junior", "Mid", "Senior", "Lead"]
    rows = []
    for i in range(80):
        rows.append({
            "Hire Date": (date(2016, 1, 1) + timedelta(days=rng.randint(0, 3000))).isoformat(),
            "Department": rng.choice(departments),
            "Level": rng.choice(levels),
            "Salary": rng.randint(40_000, 180_000),
            "Satisfaction": round(rng.uniform(1, 5), 1),
        })
    return rows


TEMPLATES: List[DemoTemplate] = [
    DemoTemplate(
        id="sales",
        name="Sales Performance",
        description="Revenue and units by region and product",
        icon="📈",
        schema={
            "Date": ColumnType.DATE,
            "Region": ColumnType.CATEGORY,
            "Product": ColumnType.CATEGORY,
            "Units": ColumnType.NUMBER,
            "Revenue": ColumnType.NUMBER,
        },
        build_rows=_sales_rows,
    ),
    DemoTemplate(
        id="marketing",
        name="Marketing Campaigns",
        description="Impressions, clicks and conversions per channel",
        icon="📣",
        schema={
            "Date": ColumnType.DATE,
            "Channel": ColumnType.CATEGORY,
            "Impressions": ColumnType.NUMBER,
            "Clicks": ColumnType.NUMBER,
            "Conversions": ColumnType.NUMBER,
        },
        build_rows=_marketing_rows,
    ),
    DemoTemplate(
        id="finance",
        name="Expense Tracker",
        description="Invoices by category and payment status",
        icon="💰",
        schema={
            "Invoice Date": ColumnType.DATE,
            "Category": ColumnType.CATEGORY,
            "Status": ColumnType.CATEGORY,
            "Amount": ColumnType.NUMBER,
        },
        build_rows=_finance_rows,
    ),
    DemoTemplate(
        id="hr",
        name="Team Overview",
        description="Headcount, salaries and satisfaction by department",
        icon="👥",
        schema={
            "Hire Date": ColumnType.DATE,
            "Department": ColumnType.CATEGORY,
            "Level": ColumnType.CATEGORY,
            "Salary": ColumnType.NUMBER,
            "Satisfaction": ColumnType.NUMBER,
        },
        build_rows=_hr_rows,
    ),
]

_BY_ID = {t.id: t for t in TEMPLATES}


def list_templates() -> List[DemoTemplate]:
    return list(TEMPLATES)


def get_template(template_id: str) -> DemoTemplate:
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise UnknownTemplateError(f"Unknown demo template '{template_id}'")
