from typing import List


class ClassifierBase:
    name = "base"

    def classify(self, data):
        raise NotImplementedError

    def describe(self) -> List[str]:
        return []
