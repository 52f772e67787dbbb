"""Bundled OpenAPI documents, loadable with ``SourceKind.BUNDLED``.

* ``petstore.yaml`` -- the Swagger Petstore sample (OpenAPI 3.0).
"""
