"""ec2-ssh-proxy - SSH ProxyCommand for EC2 via Instance Connect and SSM."""

__version__ = "0.1.0"
