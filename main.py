#!/usr/bin/env python3
import logging

from config import DisplayMode
from evaluator import Err, try_evaluate

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLES = ["1+1", "3/2", "2/3-4/5", "(1+2)/(3+4)", "-(1+1/2)*4", "1/0", "-inf", "(1+1"]

def main():
    for expr in SAMPLES:
        result = try_evaluate(expr)
        if isinstance(result, Err):
            logger.error(f"{expr!r}: {result.error}")
            continue
        v = result.value
        print(f"{expr} = {v.to_string(DisplayMode.MIXED)} ({v.to_string(DisplayMode.IMPROPER)})")

if __name__ == "__main__":
    main()
