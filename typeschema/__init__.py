import importlib

mod = "typeschema"
class LazyLoader:
    """
    Lazy loader for the typeschema functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "parse_type_to_schema": (f"{mod}.tstojsons", "parse_type_to_schema"),
    "convert_ts_type_to_json_schema": (f"{mod}.tstojsons", "convert_ts_type_to_json_schema"),
    "convert_ts_to_json_schema": (f"{mod}.tstojsons", "convert_ts_to_json_schema"),
    "generate_type_from_schema": (f"{mod}.jsonstots", "generate_type_from_schema"),
    "render_schema_type": (f"{mod}.jsonstots", "render_schema_type"),
    "convert_json_schema_to_typescript": (f"{mod}.jsonstots", "convert_json_schema_to_typescript"),
    "schema_node_to_json": (f"{mod}.schemanodes", "schema_node_to_json"),
    "split_top_level": (f"{mod}.common", "split_top_level"),
    "is_round_trip_stable": (f"{mod}.roundtrip", "is_round_trip_stable"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
