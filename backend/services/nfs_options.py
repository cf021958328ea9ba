"""exportfs option catalog and command-line builders.

Each export option is one Option value: a keyword, its values and an
omission rule. The zero-argument options are module constants; the
parameterized ones are built by the factory functions below. Keywords follow
exports(5).

    >>> exportfs_command_line("/srv/share", "10.0.0.2", [RW, fsid("1")])
    ['exportfs', '10.0.0.2:/srv/share', '-o', 'rw,fsid=1']
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

EXPORTFS = "exportfs"


class Option(BaseModel):
    """A single exportfs option, rendered as ``keyword`` or ``keyword=v1:v2``."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    values: tuple[str, ...] = ()
    omit_if_values_empty: bool = False

    def values_string(self) -> str:
        """Return ``=v1:v2`` for the non-blank values, or "" if there are none."""
        values = [v for v in self.values if v.strip()]
        if values:
            return "=" + ":".join(values)
        return ""

    def render(self) -> str:
        """Render for ``-o``; "" means the option is dropped from the list."""
        values_string = self.values_string()
        if not values_string and self.omit_if_values_empty:
            return ""
        return f"{self.keyword}{values_string}"


# --- Zero-argument options ---

# Requests must originate on a port below 1024 (default). INSECURE lifts that.
SECURE = Option(keyword="secure")
INSECURE = Option(keyword="insecure")

RW = Option(keyword="rw")
RO = Option(keyword="ro")

# ASYNC lets the server reply before changes reach stable storage; an unclean
# restart can lose or corrupt data. SYNC is the default since nfs-utils 1.0.0.
ASYNC = Option(keyword="async")
SYNC = Option(keyword="sync")

# Write delay has no effect when ASYNC is set.
WDELAY = Option(keyword="wdelay")
NO_WDELAY = Option(keyword="no_wdelay")

# Only effective on single host exports, and irrelevant for NFSv4.
HIDE = Option(keyword="hide")
NO_HIDE = Option(keyword="nohide")

# Children of a crossmnt export are exported implicitly with the parent's
# options, except fsid.
CROSS_MNT = Option(keyword="crossmnt")
NO_CROSS_MNT = Option(keyword="nocrossmnt")

SUBTREE_CHECK = Option(keyword="subtree_check")
NO_SUBTREE_CHECK = Option(keyword="no_subtree_check")

# NLM lock requests: INSECURE_LOCKS and NO_AUTH_NLM are synonyms, as are
# SECURE_LOCKS and AUTH_NLM.
INSECURE_LOCKS = Option(keyword="insecure_locks")
NO_AUTH_NLM = Option(keyword="no_auth_nlm")
SECURE_LOCKS = Option(keyword="secure_locks")
AUTH_NLM = Option(keyword="auth_nlm")

# NFSv3 only: READDIRPLUS requests get NFS3ERR_NOTSUPP.
NO_RDIRPLUS = Option(keyword="nordirplus")

# NFSv4.1+ and only where the filesystem supports pNFS exports.
PNFS = Option(keyword="pnfs")
NO_PNFS = Option(keyword="no_pnfs")

ROOT_SQUASH = Option(keyword="root_squash")
NO_ROOT_SQUASH = Option(keyword="no_root_squash")
ALL_SQUASH = Option(keyword="all_squash")
NO_ALL_SQUASH = Option(keyword="no_all_squash")

FLAGS: dict[str, Option] = {
    opt.keyword: opt
    for opt in (
        SECURE, INSECURE, RW, RO, ASYNC, SYNC, WDELAY, NO_WDELAY,
        HIDE, NO_HIDE, CROSS_MNT, NO_CROSS_MNT, SUBTREE_CHECK, NO_SUBTREE_CHECK,
        INSECURE_LOCKS, NO_AUTH_NLM, SECURE_LOCKS, AUTH_NLM, NO_RDIRPLUS,
        PNFS, NO_PNFS, ROOT_SQUASH, NO_ROOT_SQUASH, ALL_SQUASH, NO_ALL_SQUASH,
    )
}


# --- Parameterized options ---


def mount_point(path: str = "") -> Option:
    """Only export if the export point (or ``path``, when given) is a mountpoint.

    Guards against exporting the directory underneath a mountpoint when the
    filesystem failed to mount.
    """
    return Option(keyword="mountpoint", values=(path,) if path else ())


def mp(path: str = "") -> Option:
    """Short spelling of mount_point()."""
    return mount_point(path).model_copy(update={"keyword": "mp"})


def fsid(fs_id: str) -> Option:
    """Identify the exported filesystem explicitly.

    ``root`` or ``0`` marks the NFSv4 pseudo-root; otherwise a small integer
    or a UUID. Kernels up to 2.6.20 only understand the integer form.
    """
    return Option(keyword="fsid", values=(fs_id,))


def refer(*locations: str) -> Option:
    """Alternative locations a client is directed to for this export point.

    Blank locations are skipped; with none left the option is omitted.
    """
    return Option(keyword="refer", values=locations, omit_if_values_empty=True)


def replicas(*locations: str) -> Option:
    """Alternative locations given out when a client asks for replicas."""
    return Option(keyword="replicas", values=locations, omit_if_values_empty=True)


def anon_uid(uid: int) -> Option:
    """Uid that squashed requests are mapped to."""
    return Option(keyword="anonuid", values=(f"{uid:d}",))


def anon_gid(gid: int) -> Option:
    """Gid that squashed requests are mapped to."""
    return Option(keyword="anongid", values=(f"{gid:d}",))


# --- Command lines ---


def render_options(options: Iterable[Option]) -> str:
    """Join rendered options with commas, skipping the omitted ones."""
    return ",".join(rendered for rendered in (opt.render() for opt in options) if rendered)


def exportfs_command_line(path: str, host: str, options: Iterable[Option] = ()) -> list[str]:
    """Build ``exportfs host:path [-o opts]``."""
    cmd = [EXPORTFS, f"{host}:{path}"]
    options_string = render_options(options)
    if options_string:
        cmd.extend(["-o", options_string])
    return cmd


def unexportfs_command_line(path: str, host: str) -> list[str]:
    """Build ``exportfs -u host:path``. Unexport takes no options."""
    return [EXPORTFS, "-u", f"{host}:{path}"]
