import sys
from dashdock import ConfigManager, Orientation, SessionState, WidgetRef, Workspace, setup_logging

# --- Demo payload ---
class ChartWidget:
    def __init__(self, kind: str, query: str):
        self.kind = kind
        self.query = query

    def __eq__(self, other):
        return isinstance(other, ChartWidget) and (self.kind, self.query) == (other.kind, other.query)

def serialize_widget(widget: WidgetRef) -> dict:
    return {"kind": widget.payload.kind, "query": widget.payload.query}

def deserialize_widget(configuration) -> ChartWidget:
    configuration = configuration or {}
    return ChartWidget(configuration.get("kind", "grid"), configuration.get("query", ""))

def main(config_path: str = "settings.json"):
    config = ConfigManager(config_path)
    setup_logging(config.data.general.debug_mode, config.data.general.log_dir)

    print("--- 1. Build Workspace ---")
    workspace = Workspace(config.data.layout)
    session = SessionState(workspace, serialize_widget, deserialize_widget, settings=config.data.session)
    if session.restore():
        print(f"Restored dashboards: {workspace.labels}")
        return

    sales = workspace.add_dashboard("Sales")
    revenue = WidgetRef("Revenue", ChartWidget("chart", "sum(revenue)"))
    sales.add_widget(revenue)
    sales.add_widget(WidgetRef("Orders", ChartWidget("grid", "orders")))
    sales.split_region((), Orientation.HORIZONTAL, WidgetRef("Regions", ChartWidget("chart", "by_region")))
    workspace.request_new_dashboard()
    print(f"Dashboards: {workspace.labels}")

    print("--- 2. Maximize / Restore ---")
    sales.toggle_maximize(revenue)
    print(f"Maximized: {sales.is_maximized}, widgets: {[w.title for w in sales.widgets()]}")
    sales.toggle_maximize(None)
    print(f"Maximized: {sales.is_maximized}, widgets: {[w.title for w in sales.widgets()]}")

    print("--- 3. Save Session ---")
    session.save()
    print(f"Saved to {session.save_path}")

if __name__ == "__main__":
    main(*sys.argv[1:2])
