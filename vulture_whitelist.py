# Vulture whitelist - known false positives
# These are used by frameworks or Python protocols, not dead code

# Pydantic model_config and validators (used by Pydantic, not called directly)
model_config  # type: ignore
validate_encoding  # type: ignore
validate_errors  # type: ignore
validate_suites  # type: ignore
normalize_log_level  # type: ignore
validate_capacity_range  # type: ignore

# Typer CLI callback and commands (decorated, called by framework)
main  # type: ignore
suites  # type: ignore
bench  # type: ignore

# Benchmark suites (registered by the _suite decorator, looked up by name)
_putc  # type: ignore
_puts_big  # type: ignore
_puts_big_multi  # type: ignore
_write_big  # type: ignore
_write_big_random_string  # type: ignore
_puts_small  # type: ignore
_puts_huge  # type: ignore
_printf_num  # type: ignore
_shift_small  # type: ignore

# Operator protocol
__lshift__  # type: ignore
