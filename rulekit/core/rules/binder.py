# rulekit/core/rules/binder.py
"""
Rule Binder: turns a user rule definition into a Rule the engine can fire.

Accepted definitions:
- A Rule instance (returned unchanged)
- A class-based definition marked with @rule, declaring @condition,
  @action and optionally @priority methods
- An object exposing the capability interface get_condition() / get_actions()

Design principles:
- All structural checks happen here, at bind time (DefinitionError)
- Firing never introspects: each parameter gets a Binding once
- Methods are bound to the caller's object, never to a copy, so state the
  definition mutates in its actions stays visible to the caller
- Roles are looked up along an explicit chain: the definition's class chain
  (most derived first), then the object in __rule_delegate__, if any
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, Iterator, List, Optional, Tuple, get_args, get_origin, get_type_hints

from ..errors import DefinitionError, codes
from ..facts import Facts
from .binding import Binding, BindingMiss, ByName, ByType, WholeFacts
from .builder import DefaultRule
from .markers import ACTION, CONDITION, PRIORITY, ROLE_ATTR, RULE_META_ATTR, FactName, Role, RuleMeta
from .models import DEFAULT_RULE_PRIORITY, Rule

logger = logging.getLogger(__name__)

DELEGATE_ATTR = "__rule_delegate__"


@dataclass(frozen=True)
class Invoker:
    """A bound condition/action method plus the bindings of its parameters."""
    method: Callable[..., Any]
    parameters: Tuple[Tuple[str, Binding], ...]
    order: int = 0
    sequence: int = 0

    def resolve(self, facts: Facts) -> Dict[str, Any]:
        """Resolve arguments. Raises BindingMiss."""
        return {name: binding.resolve(facts) for name, binding in self.parameters}

    def invoke(self, arguments: Dict[str, Any]) -> Any:
        return self.method(**arguments)


class RuleDescriptor(Rule):
    """
    Rule produced from a class-based definition.

    Immutable once built; keeps a reference to the definition object.
    """

    def __init__(
        self,
        definition: Any,
        name: str,
        description: str,
        priority: int,
        condition: Invoker,
        actions: Tuple[Invoker, ...],
    ):
        self._definition = definition
        self._name = name
        self._description = description
        self._priority = priority
        self._condition = condition
        self._actions = actions

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def definition(self) -> Any:
        return self._definition

    @property
    def condition(self) -> Invoker:
        return self._condition

    @property
    def actions(self) -> Tuple[Invoker, ...]:
        return self._actions

    def evaluate(self, facts: Facts) -> bool:
        try:
            arguments = self._condition.resolve(facts)
        except BindingMiss as miss:
            logger.debug("Rule '%s' condition not satisfied: %s", self._name, miss)
            return False
        return bool(self._condition.invoke(arguments))

    def execute(self, facts: Facts) -> None:
        # BindingMiss propagates: the caller decides what a skipped rule means
        for invoker in self._actions:
            invoker.invoke(invoker.resolve(facts))


# ---------------------------
# Discovery
# ---------------------------

def _role_chain(definition: Any) -> Iterator[Any]:
    """Yield the definition, then its delegates, stopping on cycles."""
    seen = set()
    current = definition
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = getattr(current, DELEGATE_ATTR, None)


def _find_meta(definition: Any) -> Optional[RuleMeta]:
    for owner in _role_chain(definition):
        for klass in type(owner).__mro__:
            meta = vars(klass).get(RULE_META_ATTR)
            if isinstance(meta, RuleMeta):
                return meta
    return None


def _own_roles(owner: Any) -> List[Tuple[Role, Callable[..., Any], Any]]:
    """
    Collect marked methods of one object along its class chain.

    The most derived definition of a name wins; overriding a marked method
    without the marker drops its role.
    """
    found = []
    seen_names = set()
    for klass in type(owner).__mro__:
        for attr_name, member in vars(klass).items():
            if attr_name in seen_names:
                continue
            seen_names.add(attr_name)
            if not inspect.isfunction(member):
                continue
            role = getattr(member, ROLE_ATTR, None)
            if isinstance(role, Role):
                found.append((role, member, owner))
    return found


def _roles_by_kind(definition: Any) -> Dict[str, List[Tuple[Role, Callable[..., Any], Any]]]:
    """For each role kind, take the methods of the first object in the chain declaring it."""
    roles: Dict[str, List[Tuple[Role, Callable[..., Any], Any]]] = {}
    for owner in _role_chain(definition):
        declared: Dict[str, list] = {}
        for entry in _own_roles(owner):
            declared.setdefault(entry[0].kind, []).append(entry)
        for kind, entries in declared.items():
            roles.setdefault(kind, entries)
    return roles


# ---------------------------
# Parameter bindings
# ---------------------------

def _type_hints(func: Callable[..., Any], definition: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=True)
    except Exception as exc:
        raise DefinitionError.invalid(
            f"Cannot resolve annotations of '{func.__qualname__}': {exc}",
            error_code=codes.BINDING_UNRESOLVABLE,
            definition=definition,
        ) from exc


def _binding_for(parameter: inspect.Parameter, hint: Any, func: Callable[..., Any], definition: Any) -> Binding:
    def unresolvable(reason: str) -> DefinitionError:
        return DefinitionError.invalid(
            f"Parameter '{parameter.name}' of '{func.__qualname__}' {reason}",
            error_code=codes.BINDING_UNRESOLVABLE,
            definition=definition,
            details={"parameter": parameter.name},
        )

    if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD, parameter.POSITIONAL_ONLY):
        raise unresolvable(f"has unsupported kind {parameter.kind.description}")
    if hint is inspect.Parameter.empty:
        raise unresolvable("has no annotation: tag it with fact(...) or annotate its type")

    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        tags = [extra for extra in extras if isinstance(extra, FactName)]
        if len(tags) > 1:
            raise unresolvable("has more than one fact(...) tag")
        if tags:
            return ByName(tags[0].name, base)
        hint = base

    if inspect.isclass(hint) and issubclass(hint, Facts):
        return WholeFacts()
    if hint is Any or hint is object:
        raise unresolvable("is untagged and typed Any/object, which cannot be bound by type")
    return ByType(hint)


def _make_invoker(role: Role, func: Callable[..., Any], owner: Any, definition: Any) -> Invoker:
    hints = _type_hints(func, definition)
    parameters = list(inspect.signature(func).parameters.values())[1:]  # drop self
    bindings = tuple(
        (p.name, _binding_for(p, hints.get(p.name, inspect.Parameter.empty), func, definition))
        for p in parameters
    )
    return Invoker(
        method=func.__get__(owner, type(owner)),
        parameters=bindings,
        order=role.order,
        sequence=role.sequence,
    )


# ---------------------------
# Binding entry points
# ---------------------------

def _resolve_priority(entries: list, meta: RuleMeta, definition: Any) -> int:
    if len(entries) > 1:
        raise DefinitionError.invalid(
            "Rule definition declares more than one @priority method",
            error_code=codes.PRIORITY_INVALID,
            definition=definition,
        )
    if entries:
        _, func, owner = entries[0]
        if len(inspect.signature(func).parameters) != 1:
            raise DefinitionError.invalid(
                f"@priority method '{func.__qualname__}' must take no arguments",
                error_code=codes.PRIORITY_INVALID,
                definition=definition,
            )
        try:
            value = func.__get__(owner, type(owner))()
        except Exception as exc:
            raise DefinitionError.invalid(
                f"@priority method '{func.__qualname__}' raised {type(exc).__name__}: {exc}",
                error_code=codes.PRIORITY_INVALID,
                definition=definition,
            ) from exc
    elif meta.priority is not None:
        value = meta.priority
    else:
        return DEFAULT_RULE_PRIORITY
    if not isinstance(value, int) or isinstance(value, bool):
        raise DefinitionError.invalid(
            f"Rule priority must be an int, got {value!r}",
            error_code=codes.PRIORITY_INVALID,
            definition=definition,
        )
    return value


def _bind_annotated(definition: Any, meta: RuleMeta) -> RuleDescriptor:
    roles = _roles_by_kind(definition)

    conditions = roles.get(CONDITION, [])
    if not conditions:
        raise DefinitionError.invalid(
            f"Rule '{type(definition).__name__}' has no @condition method",
            error_code=codes.CONDITION_MISSING,
            definition=definition,
        )
    if len(conditions) > 1:
        names = sorted(func.__name__ for _, func, _ in conditions)
        raise DefinitionError.invalid(
            f"Rule '{type(definition).__name__}' has more than one @condition method: {names}",
            error_code=codes.CONDITION_DUPLICATED,
            definition=definition,
            details={"methods": names},
        )

    role, func, owner = conditions[0]
    returns = _type_hints(func, definition).get("return", inspect.Parameter.empty)
    if returns is not inspect.Parameter.empty and returns is not bool:
        raise DefinitionError.invalid(
            f"@condition method '{func.__qualname__}' must return bool, declared {returns!r}",
            error_code=codes.CONDITION_NOT_BOOLEAN,
            definition=definition,
        )
    condition = _make_invoker(role, func, owner, definition)

    action_entries = roles.get(ACTION, [])
    if not action_entries:
        raise DefinitionError.invalid(
            f"Rule '{type(definition).__name__}' has no @action method",
            error_code=codes.ACTION_MISSING,
            definition=definition,
        )
    actions = sorted(
        (_make_invoker(r, f, o, definition) for r, f, o in action_entries),
        key=lambda invoker: (invoker.order, invoker.sequence),
    )

    own_name = type(definition).__name__
    return RuleDescriptor(
        definition=definition,
        name=meta.name or own_name,
        description=meta.description or own_name,
        priority=_resolve_priority(roles.get(PRIORITY, []), meta, definition),
        condition=condition,
        actions=tuple(actions),
    )


def _has_capabilities(definition: Any) -> bool:
    return callable(getattr(definition, "get_condition", None)) and callable(
        getattr(definition, "get_actions", None)
    )


def _bind_capabilities(definition: Any) -> DefaultRule:
    own_name = type(definition).__name__
    condition = definition.get_condition()
    if not callable(condition):
        raise DefinitionError.invalid(
            f"Rule '{own_name}' get_condition() did not return a callable",
            error_code=codes.CONDITION_MISSING,
            definition=definition,
        )
    actions = list(definition.get_actions() or [])
    if not actions or not all(callable(a) for a in actions):
        raise DefinitionError.invalid(
            f"Rule '{own_name}' get_actions() must return at least one callable",
            error_code=codes.ACTION_MISSING,
            definition=definition,
        )

    priority = getattr(definition, "priority", None)
    if callable(priority):
        priority = priority()
    if priority is None:
        priority = DEFAULT_RULE_PRIORITY
    elif not isinstance(priority, int) or isinstance(priority, bool):
        raise DefinitionError.invalid(
            f"Rule priority must be an int, got {priority!r}",
            error_code=codes.PRIORITY_INVALID,
            definition=definition,
        )

    return DefaultRule(
        name=getattr(definition, "name", None) or own_name,
        description=getattr(definition, "description", None) or own_name,
        priority=priority,
        condition=condition,
        actions=actions,
    )


def bind(definition: Any) -> Rule:
    """
    Build a Rule from a user rule definition.

    Args:
        definition: Rule instance, @rule-marked object, or capability object

    Returns:
        A Rule (the definition itself when it already is one)

    Raises:
        DefinitionError: If the definition is structurally invalid
    """
    if isinstance(definition, Rule):
        return definition
    if inspect.isclass(definition):
        raise DefinitionError.invalid(
            f"Expected a rule definition instance, got class '{definition.__name__}'",
            error_code=codes.NOT_A_RULE,
        )

    meta = _find_meta(definition)
    if meta is not None:
        descriptor = _bind_annotated(definition, meta)
    elif _has_capabilities(definition):
        descriptor = _bind_capabilities(definition)
    else:
        raise DefinitionError.invalid(
            f"'{type(definition).__name__}' is not a rule: mark it with @rule "
            "or provide get_condition()/get_actions()",
            error_code=codes.NOT_A_RULE,
            definition=definition,
        )

    logger.debug("Bound rule '%s' (priority=%s)", descriptor.name, descriptor.priority)
    return descriptor
