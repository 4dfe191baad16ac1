from __future__ import annotations

from .policies import ImportProfile


# names accepted by `get_profile`, in the order the demo runs them
PROFILE_NAMES: tuple[str, ...] = ("roster", "catalog")


def get_profile(name: str) -> ImportProfile:
    """
    A registry that assigns a profile name its policies. Rules themselves live inside
    the profile modules.
    """
    if name == "roster":
        from .profiles.roster import ROSTER_PROFILE
        return ROSTER_PROFILE

    if name == "catalog":
        from .profiles.catalog import CATALOG_PROFILE
        return CATALOG_PROFILE

    raise ValueError(f"Unknown profile: {name}")
