"""Built-in CLI sub-commands for specloader.

* :mod:`~specloader.commands.load` -- load a document and summarise it.
* :mod:`~specloader.commands.resolve` -- print an operation's schema tree.
* :mod:`~specloader.commands.validate` -- run the structural rules.
* :mod:`~specloader.commands.cache` -- manage the persistent cache.

Single commands export a plain callback registered on the root app; the
``cache`` group exports a :class:`typer.Typer` sub-application.
"""
