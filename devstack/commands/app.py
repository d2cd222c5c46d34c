"""Application commands: install, cache-clear, migrate, builder, about, start."""

from devstack.commands import common_parser, run_task
from devstack.process import make_remove_file
from devstack.tasks import about, builder, cache_clear, install, migrate, start


def handle_install(args):
    run_task(install, args)


def handle_cache_clear(args):
    run_task(cache_clear, args)


def handle_migrate(args):
    run_task(migrate, args)


def handle_builder(args):
    run_task(builder, args, user=args.user)


def handle_about(args):
    run_task(about, args, discover=not args.dry_run)


def handle_start(args):
    run_task(start, args, discover=not args.dry_run, remove_file=make_remove_file(args.dry_run))


def register_app_commands(subparsers):
    """Register the application commands."""
    common = common_parser()

    parser = subparsers.add_parser(
        "start",
        parents=[common],
        help="Builds and starts the infrastructure, then install the application (composer, yarn, ...)",
    )
    parser.set_defaults(func=handle_start)

    parser = subparsers.add_parser(
        "install",
        aliases=["app:install"],
        parents=[common],
        help="Installs the application (composer, yarn, ...)",
    )
    parser.set_defaults(func=handle_install)

    parser = subparsers.add_parser("cache-clear", aliases=["app:cache-clear"], parents=[common], help="Clear the application cache")
    parser.set_defaults(func=handle_cache_clear)

    parser = subparsers.add_parser("migrate", aliases=["app:db:migrate"], parents=[common], help="Migrates database schema")
    parser.set_defaults(func=handle_migrate)

    parser = subparsers.add_parser("builder", parents=[common], help="Opens a shell (bash) into a builder container")
    parser.add_argument("--user", default="app", help="User to run the shell as (default: app)")
    parser.set_defaults(func=handle_builder)

    parser = subparsers.add_parser(
        "about",
        parents=[common],
        help="Display some help and available urls for the current project",
    )
    parser.set_defaults(func=handle_about)
