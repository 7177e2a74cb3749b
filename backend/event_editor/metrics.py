from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "event_editor_requests_total", "Total HTTP requests", ["method", "path", "status"]
)
REQUEST_LATENCY = Histogram(
    "event_editor_request_latency_seconds", "Latency of HTTP requests", ["method", "path"]
)

# Workflow-level metrics
WORKFLOW_ACTIONS = Counter(
    "event_editor_workflow_actions_total", "Workflow actions by outcome", ["action", "outcome"]
)
STORE_CALL_DURATION = Histogram(
    "event_editor_store_call_seconds", "Latency of event store calls", ["operation"]
)
