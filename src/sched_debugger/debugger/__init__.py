from sched_debugger.debugger.dumper import CacheDumper, format_node_info, format_pod

__all__ = ["CacheDumper", "format_node_info", "format_pod"]
