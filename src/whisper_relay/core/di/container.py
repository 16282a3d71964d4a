"""
轻量依赖注入容器：按端口类型登记工厂，API 与 CLI 从这里取合约实例。
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Type, TypeVar

T = TypeVar("T")


class Container:
    _instance: "Container" | None = None

    def __init__(self) -> None:
        self._factories: Dict[Type[Any], tuple[Callable[[], Any], bool]] = {}
        self._singletons: Dict[Type[Any], Any] = {}

    @classmethod
    def instance(cls) -> "Container":
        if cls._instance is None:
            cls._instance = Container()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """丢弃全局容器（测试之间隔离）。"""
        cls._instance = None

    def register(self, interface: Type[T], factory: Callable[[], T], singleton: bool = False) -> None:
        """注册依赖工厂；重复注册会覆盖旧的工厂与已缓存的单例。"""
        self._factories[interface] = (factory, singleton)
        self._singletons.pop(interface, None)

    def register_instance(self, interface: Type[T], instance: T) -> None:
        self._factories[interface] = (lambda: instance, True)
        self._singletons[interface] = instance

    def is_registered(self, interface: Type[Any]) -> bool:
        return interface in self._factories

    def resolve(self, interface: Type[T]) -> T:
        """获取依赖实例。"""
        if interface in self._singletons:
            return self._singletons[interface]

        factory_tuple = self._factories.get(interface)
        if not factory_tuple:
            raise ValueError(f"No factory registered for {interface}")

        factory, as_singleton = factory_tuple
        instance = factory()
        if as_singleton:
            self._singletons[interface] = instance
        return instance
