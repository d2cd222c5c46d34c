"""Infrastructure commands: build, up, stop, logs, ps, destroy, certificates, workers."""

from devstack.commands import common_parser, confirm, run_task
from devstack.process import make_remove_file
from devstack.tasks import (
    build,
    destroy,
    generate_certificates,
    logs,
    ps,
    stop,
    up,
    workers_start,
    workers_stop,
)


def handle_build(args):
    run_task(build, args)


def handle_up(args):
    run_task(up, args)


def handle_stop(args):
    run_task(stop, args)


def handle_logs(args):
    run_task(logs, args)


def handle_ps(args):
    run_task(ps, args)


def handle_destroy(args):
    run_task(destroy, args, force=args.force, confirm=confirm, remove_file=make_remove_file(args.dry_run))


def handle_generate_certificates(args):
    run_task(generate_certificates, args, force=args.force, remove_file=make_remove_file(args.dry_run))


def handle_workers_start(args):
    run_task(workers_start, args)


def handle_workers_stop(args):
    run_task(workers_stop, args)


def register_infra_commands(subparsers):
    """Register the infrastructure commands."""
    common = common_parser()

    parser = subparsers.add_parser("build", aliases=["infra:build"], parents=[common], help="Builds the infrastructure")
    parser.set_defaults(func=handle_build)

    parser = subparsers.add_parser("up", aliases=["infra:up"], parents=[common], help="Builds and starts the infrastructure")
    parser.set_defaults(func=handle_up)

    parser = subparsers.add_parser("stop", aliases=["infra:stop"], parents=[common], help="Stops the infrastructure")
    parser.set_defaults(func=handle_stop)

    parser = subparsers.add_parser("logs", aliases=["infra:logs"], parents=[common], help="Displays infrastructure logs")
    parser.set_defaults(func=handle_logs)

    parser = subparsers.add_parser("ps", aliases=["infra:ps"], parents=[common], help="Lists containers status")
    parser.set_defaults(func=handle_ps)

    parser = subparsers.add_parser(
        "destroy",
        aliases=["infra:destroy"],
        parents=[common],
        help="Clean the infrastructure (remove container, volume, networks)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Force the destruction without confirmation")
    parser.set_defaults(func=handle_destroy)

    parser = subparsers.add_parser(
        "generate-certificates",
        aliases=["infra:generate-certificates"],
        parents=[common],
        help="Generate SSL certificates (with mkcert if available or self-signed if not)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Force the certificates re-generation without confirmation")
    parser.set_defaults(func=handle_generate_certificates)

    parser = subparsers.add_parser("worker:start", aliases=["infra:worker:start"], parents=[common], help="Starts the workers")
    parser.set_defaults(func=handle_workers_start)

    parser = subparsers.add_parser("worker:stop", aliases=["infra:worker:stop"], parents=[common], help="Stops the workers")
    parser.set_defaults(func=handle_workers_stop)
