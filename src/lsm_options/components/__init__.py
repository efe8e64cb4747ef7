"""Options components: serializer, parser, checker, validator, cache and registry."""
