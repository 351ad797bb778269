import importlib
import inspect

import pytest

# Mapping of module -> (ProtocolName, required_methods: {name: arity})
PORT_PROTOCOLS = {
    "relayhook.ports.clock": ("Clock", {"now": 0}),
    "relayhook.ports.event_bus": ("EventBus", {"publish": 2, "subscribe": 2}),
    "relayhook.ports.cost_estimator": ("CostEstimator", {"estimate": 1}),
    "relayhook.ports.cost_meter": ("CostMeter", {"remaining": 0}),
    "relayhook.ports.state_store": (
        "StateStore",
        {"get": 3, "put": 3, "delete": 2, "items": 1, "transaction": 0},
    ),
    "relayhook.ports.telemetry": ("Telemetry", {"log": -1}),  # variable kwargs
}

# Adapter -> ports it must satisfy structurally
ADAPTERS = {
    "relayhook.adapters.clock.SystemClock": ["Clock"],
    "relayhook.adapters.cost_meter.StaticCostMeter": ["CostMeter"],
    "relayhook.adapters.memory_store.InMemoryStateStore": ["StateStore"],
    "relayhook.adapters.json_store.JsonFileStateStore": ["StateStore"],
    "relayhook.adapters.telemetry.jsonl.JsonlTelemetry": ["Telemetry"],
    "relayhook.policy.cost.ConstantCostEstimator": ["CostEstimator"],
    "relayhook.core.channel.EventChannel": ["EventBus"],
}


def _positional(fn):
    sig = inspect.signature(fn)
    # remove self / cls
    return [p for p in sig.parameters.values() if p.kind == p.POSITIONAL_OR_KEYWORD][1:]


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_required_port_signatures(module_name, meta):
    proto_name, methods = meta
    module = importlib.import_module(module_name)
    proto = getattr(module, proto_name)
    assert inspect.isclass(proto), f"{proto_name} not a class"
    for method_name, arity in methods.items():
        fn = getattr(proto, method_name, None)
        assert fn is not None, f"Missing method {method_name} on {proto_name}"
        if arity >= 0:
            params = _positional(fn)
            assert (
                len(params) == arity
            ), f"{proto_name}.{method_name} expected {arity} args got {len(params)}"


@pytest.mark.parametrize("dotted,ports", ADAPTERS.items())
def test_adapters_implement_ports(dotted, ports):
    module_name, cls_name = dotted.rsplit(".", 1)
    cls = getattr(importlib.import_module(module_name), cls_name)
    by_name = {meta[0]: meta[1] for meta in PORT_PROTOCOLS.values()}
    for port in ports:
        for method_name, arity in by_name[port].items():
            fn = getattr(cls, method_name, None)
            assert callable(fn), f"{cls_name} is missing {port}.{method_name}"
            if arity >= 0:
                assert len(_positional(fn)) >= arity
