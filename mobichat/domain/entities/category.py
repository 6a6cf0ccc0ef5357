from enum import Enum


class Category(str, Enum):
    balance = "balance"
    recharge = "recharge"
    plans = "plans"
    support = "support"
    general = "general"
