"""
CLI 入口点

whisper-relay init / stats / profile / group / events / serve
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from whisper_relay import __version__
from whisper_relay.config.settings import Settings, create_settings
from whisper_relay.core.errors import WhisperError


def create_parser() -> argparse.ArgumentParser:
    """创建 CLI 参数解析器"""
    parser = argparse.ArgumentParser(
        prog="whisper-relay",
        description="Whisper Relay - X25519 密钥目录与加密消息中继",
    )
    parser.add_argument("--config", "-c", help="配置文件路径 (YAML)")

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # init 命令
    init_parser = subparsers.add_parser("init", help="初始化目录状态（每个存储仅一次）")
    init_parser.add_argument("--owner", help="所有者账户（默认中继账户）")

    subparsers.add_parser("stats", help="显示目录统计")

    profile_parser = subparsers.add_parser("profile", help="查询账户的消息密钥")
    profile_parser.add_argument("account_id", help="账户 ID")

    group_parser = subparsers.add_parser("group", help="查询群聊元数据")
    group_parser.add_argument("group_id", help="群聊 ID")

    events_parser = subparsers.add_parser("events", help="查询已发出的通知")
    events_parser.add_argument("--event", "-e", help="事件类型过滤")
    events_parser.add_argument("--account", "-a", help="按账户过滤（发送方或接收方）")
    events_parser.add_argument("--group-id", "-g", help="按群聊过滤")
    events_parser.add_argument("--limit", "-n", type=int, default=100, help="最多返回条数")

    serve_parser = subparsers.add_parser("serve", help="启动 HTTP API")
    serve_parser.add_argument("--host", help="监听地址")
    serve_parser.add_argument("--port", type=int, help="监听端口")

    # version
    parser.add_argument("--version", "-v", action="store_true", help="显示版本")

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _load_contract(settings: Settings):
    from whisper_relay.core.contract import WhisperContract
    from whisper_relay.core.di.bootstrap import bootstrap_relay
    from whisper_relay.core.di.container import Container

    container = bootstrap_relay(settings, container=Container(), auto_init=False)
    return container.resolve(WhisperContract)


def _cmd_init(settings: Settings, owner: Optional[str]) -> int:
    from whisper_relay.core.contract import WhisperContract
    from whisper_relay.core.di.bootstrap import build_event_log, build_storage
    from whisper_relay.infrastructure.host.in_process_host import InProcessHost

    storage = build_storage(settings.storage)
    host = InProcessHost(storage, account_id=settings.api.relay_account)
    event_log = build_event_log(settings.event_log, db_url=settings.storage.db_url or None)
    try:
        with host.call(owner or settings.api.relay_account):
            contract = WhisperContract.new(host, event_log, settings.relay)
        _print_json(contract.get_stats())
    finally:
        event_log.close()
        storage.close()
    return 0


def _cmd_serve(settings: Settings, host: Optional[str], port: Optional[int]) -> int:
    import uvicorn

    from whisper_relay.api.main import create_app

    uvicorn.run(
        create_app(settings),
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_level=settings.logging.level.lower(),
    )
    return 0


def run_cli(args: Optional[list] = None) -> int:
    """
    运行 CLI

    Args:
        args: 命令行参数（默认使用 sys.argv）

    Returns:
        退出码
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f"whisper-relay v{__version__}")
        return 0

    if not parsed.command:
        parser.print_help()
        return 0

    settings = create_settings(parsed.config)

    from whisper_relay.core.di.bootstrap import configure_logging

    configure_logging(settings.logging)

    try:
        if parsed.command == "init":
            return _cmd_init(settings, parsed.owner)

        if parsed.command == "serve":
            return _cmd_serve(settings, parsed.host, parsed.port)

        contract = _load_contract(settings)
        try:
            if parsed.command == "stats":
                _print_json(contract.get_stats())

            elif parsed.command == "profile":
                profile = contract.get_profile(parsed.account_id)
                if profile is None:
                    print(f"No profile for {parsed.account_id}", file=sys.stderr)
                    return 1
                _print_json({"account_id": parsed.account_id, **profile.to_dict()})

            elif parsed.command == "group":
                group = contract.get_group(parsed.group_id)
                if group is None:
                    print(f"No group {parsed.group_id}", file=sys.stderr)
                    return 1
                _print_json(group.to_dict())

            elif parsed.command == "events":
                from whisper_relay.application.events.queries import query_events

                _print_json(
                    query_events(
                        contract.event_log,
                        event=parsed.event,
                        account=parsed.account,
                        group_id=parsed.group_id,
                        limit=parsed.limit,
                    )
                )
        finally:
            contract.event_log.close()
            contract.host.storage.close()
        return 0

    except WhisperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
