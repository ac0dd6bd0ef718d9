"""Allow ``python -m primal_sweep``."""

from primal_sweep.cli import main

if __name__ == "__main__":
    main()
