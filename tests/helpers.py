import random

from pokequiz.catalog.entity import Entity


class IdentityRandom(random.Random):
    """randint(a, b) -> b, so Fisher-Yates never moves anything."""

    def randint(self, a, b):
        return b


class ZeroRandom(random.Random):
    def randint(self, a, b):
        return a


def make_entity(id_, english, japanese=None, **others):
    names = {"english": english}
    if japanese:
        names["japanese"] = japanese
    names.update(others)
    return Entity(id=id_, names=names)


PIKACHU = make_entity(1, "Pikachu", "ピカチュウ", chinese="皮卡丘", french="Pikachu")
BULBASAUR = make_entity(2, "Bulbasaur", "フシギダネ", chinese="妙蛙种子", french="Bulbizarre")
CHARMANDER = make_entity(3, "Charmander", "ヒトカゲ", chinese="小火龙", french="Salamèche")
