"""
Executed when running: python -m tokenls
"""
from tokenls.main import main

if __name__ == "__main__":
    main()
