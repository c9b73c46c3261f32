import argparse
import os

from pulumi import automation as auto

import utils.basic as utils


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    defaults = {
        "action": "preview",
        "env": "dev",
    }
    parser.set_defaults(**defaults)
    parser.add_argument("--env", "-e", help="Environment name")
    parser.add_argument(
        "--action",
        "-a",
        help="Action to perform",
        choices=["up", "destroy", "preview", "refresh"],
    )
    args = parser.parse_args(argv)
    return args


def run_preview(stack: auto.Stack) -> None:
    header = utils.make_header("PREVIEW", stack.workspace.work_dir)
    print(header)
    stack.preview(on_output=print)


def run_refresh(stack: auto.Stack) -> None:
    header = utils.make_header("REFRESH", stack.workspace.work_dir)
    print(header)
    stack.refresh(on_output=print)


def run_destroy(stack: auto.Stack) -> None:
    header = utils.make_header("DESTROY", stack.workspace.work_dir)
    print(header)
    stack.destroy(on_output=print)


def run_up(stack: auto.Stack) -> None:
    header = utils.make_header("CREATE", stack.workspace.work_dir)
    print(header)
    # Drops associations whose floating IP was removed outside of pulumi
    stack.refresh()
    stack.up(on_output=print)


ACTIONS = {
    "preview": run_preview,
    "refresh": run_refresh,
    "destroy": run_destroy,
    "up": run_up,
}


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    root_dir = os.path.dirname(os.path.abspath(__file__))
    work_dirs = utils.get_leaf_dirs(os.path.join(root_dir, "app"))

    for work_dir in work_dirs:
        stack = auto.create_or_select_stack(
            stack_name=args.env, work_dir=work_dir
        )
        ACTIONS[args.action](stack)


if __name__ == "__main__":
    main()
