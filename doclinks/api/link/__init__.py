"""Link domain: extraction, validation and reporting of document links.

Modules are imported by path (``doclinks.api.link.ValidatorPool``) so that
the cache domain can depend on ``LinkStatus`` without import cycles.
"""
