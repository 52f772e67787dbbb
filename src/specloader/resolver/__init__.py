"""Schema resolution and schema -> plain tree conversion."""

from specloader.resolver.schema import SchemaResolver, convert_to_json_node, select_response

__all__ = ["SchemaResolver", "convert_to_json_node", "select_response"]
