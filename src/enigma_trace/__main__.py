"""Run the command line with `python -m enigma_trace`."""
from enigma_trace.cli import cli


def main():
    cli(prog_name="enigma-trace")


if __name__ == "__main__":
    main()
