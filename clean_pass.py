import argparse
import logging
import os
import sys
from pathlib import Path

# For interactive keyboard input
try:
    import select
    import termios
    import tty
    UNIX_TERMINAL = True
    TERMINAL_ERRORS = (termios.error,)
except ImportError:
    # Windows doesn't have these modules
    UNIX_TERMINAL = False
    TERMINAL_ERRORS = ()

from pass_cleaner import (
    PassCleanerError,
    Status,
    TriageSession,
    duplicate_groups,
    find_group,
    save_csv,
    status_counts,
)
from pass_cleaner.config import MODES, load_config, save_config_template

STATUS_MARKERS = {
    Status.KEEP: "✅",
    Status.DELETE: "❌",
    Status.REVIEW: "⬜",
}

ENTRY_KEYS = {'k': Status.KEEP, 'd': Status.DELETE, 'r': Status.REVIEW}
GROUP_KEYS = {'K': Status.KEEP, 'D': Status.DELETE, 'R': Status.REVIEW}


class KeyboardInput:
    """Handle keyboard input for interactive triage."""

    def __init__(self):
        self.old_settings = None

    def __enter__(self):
        if UNIX_TERMINAL:
            self.old_settings = termios.tcgetattr(sys.stdin)
            tty.setraw(sys.stdin.fileno())
        return self

    def __exit__(self, type, value, traceback):
        if UNIX_TERMINAL and self.old_settings:
            termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self.old_settings)

    def get_key(self):
        """Get a single keypress."""
        if UNIX_TERMINAL:
            if select.select([sys.stdin], [], [], 0.1) == ([sys.stdin], [], []):
                char = sys.stdin.read(1)
                if char == '\x1b':  # ESC sequence
                    # Arrow keys arrive as ESC [ A/B; a lone ESC has nothing buffered
                    if select.select([sys.stdin], [], [], 0.05) != ([sys.stdin], [], []):
                        return 'ESC'
                    next_chars = sys.stdin.read(2)
                    if next_chars == '[A': return 'UP'
                    elif next_chars == '[B': return 'DOWN'
                    return 'ESC'
                elif char == '\r' or char == '\n': return 'ENTER'
                elif char == '\x03': return 'CTRL_C'
                return char
            return None
        else:
            # Fallback for systems without terminal support
            return None


def mask_password(password, show_passwords=False):
    """Return the password for display, masked unless show_passwords is set."""
    if show_passwords:
        return password if password else "[empty]"
    return f"{'*' * len(password)} ({len(password)} chars)"


def render_group(group, cursor, position, show_passwords=False):
    """Return the screen lines for one group."""
    label = group.domain_key or "(no url)"
    lines = [
        "🔍 INTERACTIVE PASSWORD TRIAGE",
        "=" * 60,
        f"Domain: {label} ({position})",
        "=" * 60,
        "",
        "📋 Keys:",
        "  ↑↓ : Navigate between entries",
        "  k/d/r : Mark entry keep / delete / review",
        "  K/D/R : Mark whole group keep / delete / review",
        "  u : Undo last change",
        "  ENTER: Next group",
        "  ESC: Finish triage",
        "",
        "-" * 60,
    ]

    for idx, entry in enumerate(group.entries):
        pointer = "▶️ " if idx == cursor else "   "
        marker = STATUS_MARKERS[entry.status]
        lines.append(f"{pointer}{marker} [{idx + 1:2d}] {entry.url or '[no url]'}")
        if cursor is None or idx == cursor:
            lines.append(f"      👤 User: {entry.username}")
            lines.append(f"      🔑 Password: {mask_password(entry.password, show_passwords)}")
            if entry.name.strip():
                lines.append(f"      🏷️  Name: {entry.name}")
            if entry.time_last_used:
                lines.append(f"      📅 Last used: {entry.time_last_used}")
        lines.append("")

    counts = {status: 0 for status in Status}
    for entry in group.entries:
        counts[entry.status] += 1
    lines.append(f"📊 keep {counts[Status.KEEP]} · delete {counts[Status.DELETE]} · "
                 f"review {counts[Status.REVIEW]} of {len(group)} entries")
    return lines


def apply_key(session, domain_key, cursor, key):
    """Apply one keypress to the session.

    Returns (cursor, action) where action is 'stay', 'next' or 'quit'.
    """
    group = find_group(session.groups, domain_key)
    if group is None:
        return 0, 'next'
    total = len(group)

    if key == 'UP':
        return (cursor - 1) % total, 'stay'
    if key == 'DOWN':
        return (cursor + 1) % total, 'stay'
    if key in ENTRY_KEYS:
        session.set_entry_status(domain_key, cursor, ENTRY_KEYS[key])
        return cursor, 'stay'
    if key in GROUP_KEYS:
        session.set_group_status(domain_key, GROUP_KEYS[key])
        return cursor, 'stay'
    if key == 'u':
        session.undo()
        return cursor, 'stay'
    if key == 'ENTER':
        return cursor, 'next'
    if key in ('ESC', 'CTRL_C'):
        return cursor, 'quit'
    return cursor, 'stay'


def parse_text_command(command):
    """Translate a typed fallback command into (entry_index, key).

    '2d' marks entry 2 delete, 'D' marks the group, 'n' moves on, 'q' quits.
    entry_index is zero-based or None when the command has no number.
    """
    command = command.strip()
    if command in ('', 'n'):
        return None, 'ENTER'
    if command == 'q':
        return None, 'ESC'
    if command in GROUP_KEYS or command == 'u':
        return None, command
    if len(command) >= 2 and command[:-1].isdigit() and command[-1] in ENTRY_KEYS:
        return int(command[:-1]) - 1, command[-1]
    return None, None


def text_triage_group(session, domain_key, position, show_passwords=False):
    """Triage one group by typed commands when raw keyboard input is unavailable."""
    while True:
        group = find_group(session.groups, domain_key)
        print("\n".join(render_group(group, None, position, show_passwords)))
        print("Commands: <n>k/<n>d/<n>r for one entry, K/D/R for the group, u undo, n next, q finish")
        try:
            command = input("> ")
        except (EOFError, KeyboardInterrupt):
            return 'quit'

        entry_index, key = parse_text_command(command)
        if key is None:
            print(f"Unknown command: {command!r}")
            continue
        cursor = entry_index if entry_index is not None else 0
        if entry_index is not None and not 0 <= entry_index < len(group):
            print(f"Please enter an entry number between 1 and {len(group)}")
            continue
        _, action = apply_key(session, domain_key, cursor, key)
        if action != 'stay':
            return action


def triage_group(session, domain_key, position, show_passwords=False):
    """Interactive triage of one group using arrow keys."""
    cursor = 0
    while True:
        os.system('clear' if os.name == 'posix' else 'cls')
        group = find_group(session.groups, domain_key)
        print("\n".join(render_group(group, cursor, position, show_passwords)))

        with KeyboardInput() as kb:
            key = None
            while key is None:
                key = kb.get_key()

        cursor, action = apply_key(session, domain_key, cursor, key)
        if action != 'stay':
            return action


def interactive_triage(session, show_passwords=False, logger=None):
    """Walk every group and let the user mark entries."""
    groups = session.groups
    total_groups = len(groups)
    keyboard = UNIX_TERMINAL and sys.stdin.isatty()

    for current, group in enumerate(groups, 1):
        position = f"{current}/{total_groups}"
        try:
            if keyboard:
                action = triage_group(session, group.domain_key, position, show_passwords)
            else:
                action = text_triage_group(session, group.domain_key, position, show_passwords)
        except TERMINAL_ERRORS as e:
            if logger:
                logger.warning(f"Keyboard navigation not available ({e}), using text input")
            keyboard = False
            action = text_triage_group(session, group.domain_key, position, show_passwords)

        if action == 'quit':
            print("\n\n🚪 Finishing triage...")
            print(f"📊 Reviewed {current} of {total_groups} groups")
            break

    return session.groups


def print_summary(groups):
    """Print group and status counts for the current collection."""
    counts = status_counts(groups)
    total = sum(counts.values())
    shared = duplicate_groups(groups)

    print("=" * 50)
    print("📊 SUMMARY:")
    print("=" * 50)
    print(f"Entries: {total:,}")
    print(f"Domains: {len(groups):,}")
    print(f"Domains with more than one entry: {len(shared):,}")
    print(f"Keep: {counts[Status.KEEP]:,}  Delete: {counts[Status.DELETE]:,}  "
          f"Review: {counts[Status.REVIEW]:,}")

    if shared:
        print("\nDomains with several saved logins:")
        for group in sorted(shared, key=len, reverse=True):
            print(f"  {len(group):3d}  {group.domain_key or '(no url)'}")


def setup_logging(verbose=False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    return logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Group, triage and clean Chrome/Chromium password CSV exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -f passwords.csv
  %(prog)s -f passwords.csv --drop-deleted --output cleaned.csv
  %(prog)s -f passwords.csv --mode summary
  %(prog)s --save-config  # Create configuration template
"""
    )

    parser.add_argument(
        '-f', '--file',
        help='Path to the browser password CSV export'
    )

    parser.add_argument(
        '--mode',
        choices=MODES,
        help='interactive triage or summary only (default: interactive)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--output',
        help='Output file path (default: cleaned_passwords.csv)'
    )

    parser.add_argument(
        '--config',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--save-config',
        action='store_true',
        help='Save a configuration file template and exit'
    )

    parser.add_argument(
        '--show-passwords',
        action='store_true',
        help='Show passwords in interactive mode (use with caution)'
    )

    parser.add_argument(
        '--drop-deleted',
        action='store_true',
        help='Leave entries marked delete out of the cleaned CSV'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the script."""
    args = parse_arguments(argv)

    if args.save_config:
        config_path = save_config_template(args.config)
        print(f"✅ Configuration template saved to: {config_path}")
        return 0

    if not args.file:
        print("❌ Error: --file argument is required")
        return 1

    logger = setup_logging(args.verbose)

    try:
        config, config_file = load_config(args.config, logger)
    except PassCleanerError as e:
        print(f"❌ Error: {e}")
        return 1

    # Command line arguments override config file settings
    if args.mode:
        config['mode'] = args.mode
    if args.verbose:
        config['verbose'] = True
    if args.output:
        config['output'] = args.output
    if args.show_passwords:
        config['show_passwords'] = True
    if args.drop_deleted:
        config['drop_deleted'] = True

    if config['verbose']:
        logging.getLogger().setLevel(logging.DEBUG)

    csv_file = Path(args.file)
    if csv_file.suffix.lower() != '.csv':
        print("❌ Error: Please provide a CSV file")
        return 1
    if not csv_file.is_file():
        print(f"❌ Error: File not found: {csv_file}")
        return 1

    logger.info(f"Processing file: {csv_file}")
    if config_file:
        logger.info(f"Using configuration from: {config_file}")

    session = TriageSession(logger)
    try:
        session.import_csv(csv_file.read_bytes())
    except PassCleanerError as e:
        print(f"❌ Error parsing CSV file. Please make sure it's a valid export file. ({e})")
        return 1

    if not session.groups:
        print("No password entries found in the export.")
        return 0

    if config['mode'] == 'summary':
        print_summary(session.groups)
        return 0

    try:
        interactive_triage(session, config['show_passwords'], logger)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print("\nOperation cancelled. Nothing was saved.")
        return 0

    exclude = [Status.DELETE] if config['drop_deleted'] else []
    entries = session.entries(exclude)
    output_path = save_csv(entries, config['output'], logger)

    print("\n✅ TRIAGE COMPLETE!")
    print_summary(session.groups)
    print(f"\nCleaned CSV saved as: {output_path} ({len(entries):,} entries)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
