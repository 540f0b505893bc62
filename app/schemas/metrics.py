# schemas/metrics.py

from pydantic import BaseModel
from typing import List


class TopSellingProduct(BaseModel):
    product_name: str
    total_sales: int


class DashboardMetricsResponse(BaseModel):
    total_products: int
    total_machines: int
    total_stock_quantity: int
    total_stock_value: float
    total_revenue: float
    total_sales_count: int
    top_selling_products: List[TopSellingProduct]


class CompatMetricsResponse(BaseModel):
    totalProducts: int
    activeMachines: int
    itemsInStock: int
    stockValue: float


class RevenuePoint(BaseModel):
    date: str
    revenue: float


class MachineDistributionRow(BaseModel):
    machine_id: int
    machine_name: str
    total_qty: int
    total_value: float
