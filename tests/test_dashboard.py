import httpx
import pytest

from conftest import CUSTOMERS, envelope
from freshmart.app.common.errors import UnknownSectionError
from freshmart.modules.dashboard.controller import SECTIONS, AdminConsole


@pytest.fixture()
def console(api, page):
    return AdminConsole(api, page, low_stock_threshold=10, recent_orders_limit=2)


def visible(page):
    return [name for name in SECTIONS if page.is_visible(f"{name}-section")]


def test_dashboard_fills_three_regions(console, page, run):
    run(console.sections.show_section("dashboard"))

    assert visible(page) == ["dashboard"]
    assert page.active_nav == {"nav-dashboard"}
    assert page.region("statsContainer").count('class="stats-card') == 4
    assert "$450" in page.region("statsContainer")
    assert page.region("recentOrders").count("Order #") == 2
    assert "Order #12" not in page.region("recentOrders")
    assert page.region("lowStockProducts").count("low-stock-item") == 2
    assert page.alerts.alerts == []


def test_one_failing_loader_leaves_the_others(console, page, backend, run):
    backend.on("GET", "/api/orders", raises=httpx.ConnectError("down"))

    run(console.dashboard.load())

    assert "recentOrders" not in page.regions
    assert "statsContainer" in page.regions
    assert "lowStockProducts" in page.regions
    assert [(a.message, a.level) for a in page.alerts.alerts] == [("Error loading dashboard data", "danger")]


def test_dashboard_renders_placeholders_for_empty_data(console, page, backend, run):
    backend.on("GET", "/api/orders", envelope([]))
    backend.on("GET", "/api/products", envelope([]))

    run(console.dashboard.load())

    assert "No recent orders found." in page.region("recentOrders")
    assert "All products are well stocked." in page.region("lowStockProducts")


@pytest.mark.parametrize("name, region", [
    ("customers", "customersTable"),
    ("products", "productsTable"),
    ("orders", "ordersTable"),
    ("reports", "reportsContainer"),
])
def test_show_section_switches_view_and_loads(console, page, run, name, region):
    async def scenario():
        await console.sections.show_section("dashboard")
        await console.sections.show_section(name)

    run(scenario())

    assert visible(page) == [name]
    assert page.active_nav == {f"nav-{name}"}
    assert console.sections.current_section == name
    assert page.region(region) != ""


def test_show_section_with_explicit_nav_control(console, page, run):
    run(console.sections.show_section("orders", nav_control="sidebar-orders"))

    assert page.active_nav == {"sidebar-orders"}


def test_unknown_section_is_rejected(console, page, backend, run):
    with pytest.raises(UnknownSectionError):
        run(console.sections.show_section("settings"))

    assert console.sections.current_section == "dashboard"
    assert visible(page) == []
    assert backend.calls == []


def test_customer_search_keeps_the_cached_list(console, page, backend, run):
    backend.on("GET", "/api/customers/search", envelope(CUSTOMERS[1:]))

    async def scenario():
        await console.customers.load()
        await console.customers.search("grace")

    run(scenario())

    assert "Grace Hopper" in page.region("customersTable")
    assert "Ada Lovelace" not in page.region("customersTable")
    assert [c.customer_id for c in console.customers.all_customers] == ["CUST001", "CUST002"]


def test_customer_search_without_match_warns(console, page, backend, run):
    backend.on("GET", "/api/customers/search", envelope(message="No customers found", success=False), status=404)

    run(console.customers.search("nobody"))

    assert [(a.message, a.level) for a in page.alerts.alerts] == [("No customers found", "warning")]


def test_blank_customer_search_reloads(console, backend, run):
    run(console.customers.search(" "))

    assert backend.paths() == [("GET", "/api/customers")]


def test_declined_delete_sends_nothing(console, backend, run):
    asked = []

    ok = run(console.customers.delete("CUST001", confirm=lambda message: asked.append(message) or False))

    assert ok is False
    assert asked == ["Are you sure you want to delete this customer?"]
    assert backend.calls == []


def test_confirmed_delete_reloads_the_list(console, page, backend, run):
    backend.on("DELETE", "/api/customers/CUST001", envelope(None, "Customer deleted successfully"))
    backend.on("GET", "/api/customers", envelope(CUSTOMERS[1:]))

    ok = run(console.customers.delete("CUST001", confirm=lambda message: True))

    assert ok is True
    assert backend.paths() == [("DELETE", "/api/customers/CUST001"), ("GET", "/api/customers")]
    assert [(a.message, a.level) for a in page.alerts.alerts] == [("Customer deleted successfully", "success")]
    assert "Ada Lovelace" not in page.region("customersTable")


def test_failed_delete_alerts(console, page, backend, run):
    backend.on("DELETE", "/api/customers/CUST001", envelope(message="Customer has open orders", success=False))

    ok = run(console.customers.delete("CUST001", confirm=lambda message: True))

    assert ok is False
    assert [(a.message, a.level) for a in page.alerts.alerts] == [("Customer has open orders", "danger")]


def test_orders_status_filter_uses_the_cache(console, page, backend, run):
    run(console.orders.load())
    calls = len(backend.calls)

    console.orders.filter_by_status("SHIPPED")

    assert [o.id for o in console.orders.filtered()] == [12]
    assert page.region("ordersTable").count("<tr>") == 2
    assert len(backend.calls) == calls

    console.orders.filter_by_status(None)
    assert page.region("ordersTable").count("<tr>") == 4


def test_reports_render_every_status(console, page, run):
    run(console.reports.load())

    html = page.region("reportsContainer")
    assert "Cancelled" in html
    assert "$450" in html


def test_customer_search_not_found_replaces_the_table(console, page, backend, run):
    backend.on("GET", "/api/customers/search", envelope(message="Customer not found", success=False), status=404)

    async def scenario():
        await console.customers.load()
        await console.customers.search("nobody")

    run(scenario())

    assert "No customers found." in page.region("customersTable")
    assert "Ada Lovelace" not in page.region("customersTable")
    assert len(console.customers.all_customers) == 2


def test_show_section_can_skip_the_loader(console, page, backend, run):
    run(console.sections.show_section("customers", load=False))

    assert visible(page) == ["customers"]
    assert console.sections.current_section == "customers"
    assert backend.calls == []
