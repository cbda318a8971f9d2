"""Cross-check random expressions against Python's own arithmetic. Runs until interrupted."""
import math
import random
import re
import string
import warnings

from calculator.runtime import calculate

warnings.filterwarnings("ignore")


def eval_py(code: str) -> float | str:
    try:
        return float(eval(code))
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    try:
        return calculate(code)
    except Exception as e:
        return str(e)


if __name__ == "__main__":
    alphabet = string.digits + ".()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int devision (10 // 3)

        res_py = eval_py(code)
        res_my = eval_my(code)
        # only numeric disagreements matter, the grammars differ on what is an error
        if not isinstance(res_py, float) or not isinstance(res_my, float):
            continue
        if math.isclose(res_my, res_py) or (math.isnan(res_my) and math.isnan(res_py)):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
