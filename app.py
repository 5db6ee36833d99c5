import sys

from harness.runner import main


if __name__ == "__main__":
    # 运行全部执行策略
    sys.exit(main())
