#!/usr/bin/env python3
"""
Basic usage of tlschecker as a library
"""
import sys

from tlschecker import CheckError, check_domain


def main():
    """Main entry point"""
    # Default domain
    domain = "www.google.com"

    # Allow domain to be passed as command line argument
    if len(sys.argv) > 1:
        domain = sys.argv[1]

    print(f"Checking: {domain}")
    print()

    try:
        result = check_domain(domain)
    except CheckError as e:
        print(f"Error: {e}")
        return

    config = result.ssl_config
    print(f"Server: {config.server_name or result.host_name}")
    print(f"TLS 1.2 supported: {config.protocols.tlsv1_2}")
    print(f"Heartbleed: {config.heartbleed}")
    for chain in result.cert_alg_list:
        for cert in chain.cert_list:
            print(f"{chain.algorithm}: {', '.join(cert.cn)} "
                  f"(valid to {cert.valid_to})")
    print("Cipher Suites:")
    for cipher_suite in config.cipher_suites:
        print(f"  {cipher_suite}")


if __name__ == "__main__":
    main()
