import numpy as np
import torch

SCALARTYPES = (complex, float, int, np.number)


def is_scalar(f):
    """Determine if the input argument is a scalar.

    Returns True if the input is an integer, float, complex number,
    a NumPy scalar/0-dim array, or a 1-element PyTorch tensor.

    Parameters
    ----------
    f : object
        Any input quantity

    Returns
    -------
    bool
        - True if the input is a scalar or a scalar-like object
        - False otherwise
    """
    if isinstance(f, SCALARTYPES):
        return True
    elif (
        isinstance(f, np.ndarray) and f.size == 1 and isinstance(f.item(), SCALARTYPES)
    ):
        return True
    elif torch.is_tensor(f):
        if f.numel() == 1:
            return True
    return False


def as_vector3(value, dtype=torch.float64, device=None):
    """
    Coerce a 3-vector (list, numpy array or tensor) to a detached tensor.

    Parameters
    ----------
    value : array-like
        Three components.
    dtype : torch.dtype, default: torch.float64
        Desired dtype for the output tensor.
    device : torch.device, optional
        Desired device for the output tensor.

    Returns
    -------
    torch.Tensor of shape (3,)
    """
    if torch.is_tensor(value):
        vec = value.detach().clone().to(dtype=dtype, device=device)
    else:
        vec = torch.tensor(np.asarray(value, dtype=float), dtype=dtype, device=device)
    vec = vec.reshape(-1)
    if vec.shape[0] != 3:
        raise ValueError(f"Expected a 3-vector, got shape {tuple(vec.shape)}")
    return vec


def as_array_n_by_dim(pts, dim, dtype=torch.float64, device=None):
    """
    Coerce the input to a 2D PyTorch tensor with shape (n_pts, dim).

    Parameters
    ----------
    pts : array-like
        Input points (list, array, or tensor).
    dim : int
        Expected number of columns.
    dtype : torch.dtype, default: torch.float64
        Desired dtype for the output tensor.
    device : torch.device, optional
        Desired device for the output tensor.

    Returns
    -------
    pts : torch.Tensor of shape (n_pts, dim)
    """
    pts = torch.as_tensor(pts, dtype=dtype, device=device)

    if dim > 1:
        if pts.ndim == 1:
            # Add a row if needed
            pts = pts.unsqueeze(0)
    elif pts.ndim == 1:
        # Convert to (n, 1)
        pts = pts.unsqueeze(1)

    if pts.ndim != 2 or pts.shape[1] != dim:
        raise ValueError(
            f"pts must be a column vector of shape (n_pts, {dim}) not {tuple(pts.shape)}"
        )

    return pts


def as_points(position):
    """
    Coerce a single point or a batch of points to shape (n, 3).

    Returns
    -------
    pts : torch.Tensor of shape (n, 3)
    single : bool
        ``True`` when the input was a single point, so callers can squeeze
        their result back to shape (3,) or a scalar.
    """
    pts = torch.as_tensor(position, dtype=torch.float64)
    single = pts.ndim == 1
    return as_array_n_by_dim(pts, 3), single


def restore_shape(values, single):
    """Undo the batching applied by :func:`as_points`."""
    if single:
        return values[0]
    return values
