from __future__ import annotations

from collision_traffic.pipeline import main


if __name__ == "__main__":
    main()
