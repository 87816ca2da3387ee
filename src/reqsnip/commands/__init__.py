"""Sub-command groups registered on the root ``reqsnip`` app.

* :mod:`~reqsnip.commands.config` -- view and change the user configuration.
"""
