"""
rulekit core: facts, rules, engine and errors.
"""
