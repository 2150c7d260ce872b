from dishka import Provider as DishkaProvider

from ohmage.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for ohmage DI providers; defaults to the unit-of-work scope."""

    scope = Scope.UOW
