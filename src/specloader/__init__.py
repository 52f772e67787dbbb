"""specloader -- load, cache, resolve and validate OpenAPI 3.x documents.

A document is identified by a location and a source kind (URL, local file,
or a resource bundled in an installed package). The loader fetches and
decodes it once per process, keeps the decoded graph in an in-process
cache, and can write it through to a per-user on-disk cache that also
serves as a fallback when the source is unavailable.

Typical usage::

    from specloader.loader import DocumentLoader
    from specloader.models import SourceKind
    from specloader.resolver import SchemaResolver
    from specloader.validator import SpecValidator

    doc = DocumentLoader().load("petstore.yaml", SourceKind.BUNDLED)
    SchemaResolver(doc).resolve_schema_from_path("/pets", "get")
    SpecValidator().validate(doc).is_valid

Modules:
    app: Typer application and CLI entry point.
    codec: JSON/YAML conversion to and from the document model.
    document: Pydantic models of the OpenAPI document graph.
    loader: Source acquisition, format sniffing and the document loader.
    cache: The persistent (on-disk) document cache.
    resolver: Schema lookup and schema-to-tree conversion.
    validator: Structural rules and string-format predicates.
    models: Configuration and loader value types.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
