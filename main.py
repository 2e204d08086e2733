from aws_ip.cli.app import cli


def main():
    """aws-ip CLI 진입점. aws_ip.cli.app:cli에 위임"""
    cli()


if __name__ == "__main__":
    main()
