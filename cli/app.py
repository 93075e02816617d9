"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    subnets --version               # 버전 표시
    subnets get <cluster> [옵션]     # 클러스터 서브넷 조회

    예시:
    subnets get prod                                  # 클러스터 태그가 있는 전체 서브넷
    subnets get prod --zone ap-northeast-2a           # 가용 영역으로 필터
    subnets get prod --name private-a --output json   # Name 태그로 필터, JSON 출력

종료 코드:
    0: 성공 (결과가 비어 있어도 성공)
    1: 서브넷 탐색 실패 (DiscoveryFailure)
"""

from __future__ import annotations

import json
from dataclasses import asdict

import click
from click import Context

from cli.ui import print_error, print_subnet_table, print_warning, setup_logging
from core.config import get_default_profile, get_default_region, get_version
from core.data.subnets import Constraints, Subnet, SubnetProvider
from core.exceptions import DiscoveryFailure, is_access_denied, is_throttling


VERSION = get_version()


def subnet_to_dict(subnet: Subnet) -> dict:
    """JSON 출력용 딕셔너리 변환 (태그는 순서를 유지한 리스트)"""
    data = asdict(subnet)
    data["name"] = subnet.name
    data["tags"] = [{"Key": tag.key, "Value": tag.value} for tag in subnet.tags]
    return data


def create_session(profile: str | None, region: str | None):
    """boto3 Session 생성"""
    import boto3

    return boto3.Session(profile_name=profile, region_name=region)


@click.group()
@click.version_option(VERSION, prog_name="subnets")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """클러스터 노드 배치용 서브넷 탐색 CLI"""
    setup_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command("get")
@click.argument("cluster")
@click.option("-n", "--name", default=None, help="Name 태그 값 (정확히 일치)")
@click.option("-k", "--tag-key", "tag_key", default=None, help="서브넷에 있어야 하는 태그 키")
@click.option("-z", "--zone", "zones", multiple=True, help="가용 영역 (다중 가능)")
@click.option("-p", "--profile", default=None, help="AWS 프로파일 (기본: AWS_PROFILE)")
@click.option("-r", "--region", default=None, help="리전 (기본: AWS_REGION 또는 설정값)")
@click.option(
    "-o",
    "--output",
    type=click.Choice(["table", "json"]),
    default="table",
    help="출력 형식",
)
def get_command(
    cluster: str,
    name: str | None,
    tag_key: str | None,
    zones: tuple[str, ...],
    profile: str | None,
    region: str | None,
    output: str,
) -> None:
    """클러스터에 태그된 서브넷을 조회하고 조건으로 필터링

    \b
    Examples:
        subnets get prod
        subnets get prod -z ap-northeast-2a -z ap-northeast-2c
        subnets get prod -k kubernetes.io/role/internal-elb -o json
    """
    region = region or get_default_region()
    session = create_session(profile or get_default_profile(), region)
    constraints = Constraints(name=name, tag_key=tag_key, zones=zones)

    with SubnetProvider.from_session(session, region_name=region) as provider:
        try:
            subnets = provider.get(cluster, constraints)
        except DiscoveryFailure as e:
            if is_access_denied(e):
                print_error(f"{e} (ec2:DescribeSubnets 권한을 확인하세요)")
            elif is_throttling(e):
                print_error(f"{e} (API 호출 제한, 잠시 후 다시 시도하세요)")
            else:
                print_error(str(e))
            raise SystemExit(1) from e

    if output == "json":
        click.echo(json.dumps([subnet_to_dict(s) for s in subnets], indent=2, ensure_ascii=False))
        return

    if not subnets:
        print_warning(f"조건에 맞는 서브넷이 없습니다 (cluster={cluster})")
        return

    print_subnet_table(subnets, title=f"{cluster} ({region})")


if __name__ == "__main__":
    cli()
