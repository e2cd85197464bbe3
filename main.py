from tracker.logger import setup_logging


def main():
    """Main entry point for habitgrid."""
    setup_logging()

    from cli.habit_cmd import habitgrid
    habitgrid()


if __name__ == "__main__":
    main()
