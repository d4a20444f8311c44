# renderer/integrators.py
from csgtracer.core.color import BLACK, WHITE, Color
from csgtracer.core.pcg import PCG
from csgtracer.core.ray import Ray
from csgtracer.exceptions import ConfigurationError
from csgtracer.geometry.world import World

# Lower bound of the Russian roulette termination probability
MIN_TERMINATION_PROBABILITY = 0.05


class Renderer:
    """
    Abstract integrator: a callable turning a ray into the radiance it
    carries back to the camera.
    """
    def __init__(self, world: World, background_color: Color = BLACK):
        self.world = world
        self.background_color = background_color

    def __call__(self, ray: Ray) -> Color:
        raise NotImplementedError("__call__() must be implemented by subclasses.")


class OnOffRenderer(Renderer):
    """Paints ``color`` wherever a shape is hit, the background elsewhere."""
    def __init__(self, world: World, background_color: Color = BLACK, color: Color = WHITE):
        super().__init__(world, background_color)
        self.color = color

    def __call__(self, ray: Ray) -> Color:
        return self.color if self.world.hit(ray) is not None else self.background_color


class FlatRenderer(Renderer):
    """
    Shows the surface pigment plus the emitted radiance of the closest
    shape, with no lighting at all.
    """
    def __call__(self, ray: Ray) -> Color:
        hit = self.world.hit(ray)
        if hit is None:
            return self.background_color
        material = hit.material
        uv = hit.surface_point
        return material.brdf.pigment.get_color(uv) + material.emitted_radiance.get_color(uv)


class PathTracer(Renderer):
    """
    Monte Carlo path tracer.

    At every hit ``n_rays`` secondary rays are drawn from the BRDF; paths
    longer than ``max_depth`` bounces return black, and from
    ``russian_roulette_limit`` bounces on they are randomly terminated with
    a probability that grows as the surface gets darker. Survivors are
    rescaled so that the estimator stays unbiased.
    """
    def __init__(self, world: World, pcg: PCG = None, n_rays: int = 10, max_depth: int = 2,
                 russian_roulette_limit: int = 3, background_color: Color = BLACK):
        if n_rays <= 0:
            raise ConfigurationError(f"n_rays must be a positive integer, got {n_rays!r}")
        if max_depth < 0 or russian_roulette_limit < 0:
            raise ConfigurationError(
                f"max_depth and russian_roulette_limit must be non-negative, "
                f"got {max_depth!r} and {russian_roulette_limit!r}"
            )
        super().__init__(world, background_color)
        self.pcg = pcg if pcg is not None else PCG()
        self.n_rays = n_rays
        self.max_depth = max_depth
        self.russian_roulette_limit = russian_roulette_limit

    def __call__(self, ray: Ray) -> Color:
        if ray.depth > self.max_depth:
            return BLACK

        hit = self.world.hit(ray)
        if hit is None:
            return self.background_color

        material = hit.material
        uv = hit.surface_point
        hit_color = material.brdf.pigment.get_color(uv)
        emitted_radiance = material.emitted_radiance.get_color(uv)

        hit_color_lum = hit_color.max_channel()

        if ray.depth >= self.russian_roulette_limit:
            q = max(MIN_TERMINATION_PROBABILITY, 1.0 - hit_color_lum)
            if self.pcg.random_float() > q:
                hit_color = hit_color / (1.0 - q)
            else:
                return emitted_radiance

        if hit_color_lum <= 0.0:
            return emitted_radiance

        cum_radiance = Color()
        for _ in range(self.n_rays):
            new_ray = material.brdf.scatter_ray(
                pcg=self.pcg,
                incoming_dir=hit.ray.dir,
                interaction_point=hit.world_point,
                normal=hit.normal,
                depth=ray.depth + 1,
            )
            cum_radiance = cum_radiance + self(new_ray)

        return emitted_radiance + hit_color * (cum_radiance / self.n_rays)
