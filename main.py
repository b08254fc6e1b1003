import logging

from raycaster.game import Game


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    Game().run()


if __name__ == "__main__":
    main()
