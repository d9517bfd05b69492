"""
Helper functions for the mathematics of elliptic curves over F_p
"""

__all__ = ["is_quadratic_residue", "modular_sqrt"]


def is_quadratic_residue(n: int, p: int) -> bool:
    """
    Euler's criterion. Returns True if (n|p) != -1. (We include 0 as quadratic residues.)
    """
    n = n % p
    if n == 0:
        return True
    return pow(n, (p - 1) >> 1, p) == 1


def modular_sqrt(n: int, p: int) -> int:
    """
    Assuming n is a quadratic residue mod p, we return an integer r such that r^2 = n (mod p).

    Only primes p = 3 (mod 4) are supported, which covers secp256k1: r = n^((p+1)/4).
    """
    if p & 3 != 3:
        raise ValueError("modular_sqrt requires a prime p = 3 (mod 4)")

    n = n % p
    if n == 0:
        return 0

    if not is_quadratic_residue(n, p):
        raise ValueError("Square root requested for quadratic non-residue")

    return pow(n, (p + 1) >> 2, p)
