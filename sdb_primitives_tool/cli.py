"""CLI entry point for sdb-primitives-tool.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from sdb_primitives_tool.coordination.commands.counter_commands import (
    dec_command,
    get_counter_command,
    inc_command,
)
from sdb_primitives_tool.coordination.commands.domain_commands import (
    create_domain_command,
    delete_domain_command,
    domain_info_command,
    drop_domain_command,
)
from sdb_primitives_tool.coordination.commands.mutex_commands import (
    lock_acquire_command,
    lock_check_command,
    lock_release_command,
)


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """Distributed counters and locks on top of Amazon SimpleDB conditional writes"""
    pass


@main.group("coordination")
def coordination() -> None:
    """SimpleDB-backed atomic counters and mutexes"""
    pass


# Register domain commands
coordination.add_command(create_domain_command)
coordination.add_command(drop_domain_command)
coordination.add_command(delete_domain_command)  # Alias for drop-domain
coordination.add_command(domain_info_command)

# Register counter commands
coordination.add_command(inc_command)
coordination.add_command(dec_command)
coordination.add_command(get_counter_command)

# Register mutex commands
coordination.add_command(lock_acquire_command)
coordination.add_command(lock_release_command)
coordination.add_command(lock_check_command)

if __name__ == "__main__":
    main()
