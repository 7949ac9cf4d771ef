"""Installer artifacts staged onto every target host."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class Artifact:
    """A local file and where it lands on the remote host."""

    local_path: Path
    remote_path: str

    @property
    def name(self) -> str:
        """File name shared by both ends."""
        return self.local_path.name


@dataclass(frozen=True)
class ArtifactPair:
    """The installer package and the certificate that signs it."""

    package: Artifact
    certificate: Artifact

    @classmethod
    def from_names(
        cls,
        package: str,
        certificate: str,
        local_dir: Path | str,
        staging_dir: str,
    ) -> "ArtifactPair":
        """Resolve both file names against the local and staging directories.

        Args:
            package: Installer file name (or path relative to local_dir)
            certificate: Certificate file name (or path relative to local_dir)
            local_dir: Directory holding both files locally
            staging_dir: Administrative directory on the remote host

        Returns:
            ArtifactPair with absolute local paths and remote paths
        """
        base = Path(local_dir)
        package_path = base / package
        certificate_path = base / certificate
        return cls(
            package=Artifact(
                local_path=package_path,
                remote_path=str(PurePosixPath(staging_dir) / package_path.name),
            ),
            certificate=Artifact(
                local_path=certificate_path,
                remote_path=str(PurePosixPath(staging_dir) / certificate_path.name),
            ),
        )

    def missing(self) -> list[Path]:
        """Return local paths that do not exist as regular files."""
        return [
            artifact.local_path
            for artifact in (self.package, self.certificate)
            if not artifact.local_path.is_file()
        ]

    def outside(self, local_dir: Path | str) -> list[Artifact]:
        """Return artifacts whose local file does not live under local_dir."""
        base = Path(local_dir).resolve()
        return [
            artifact
            for artifact in (self.package, self.certificate)
            if not artifact.local_path.resolve().is_relative_to(base)
        ]
